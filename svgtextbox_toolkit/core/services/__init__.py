from __future__ import annotations

"""High-level orchestration services."""

from .transform_service import TransformService  # noqa: F401

__all__: list[str] = [
    "TransformService",
]
