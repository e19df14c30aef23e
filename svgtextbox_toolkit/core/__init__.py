"""GUI-agnostic core: tree traversal, the passes, and the service running them."""
