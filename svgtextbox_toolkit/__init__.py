"""Top-level package for svgtextbox_toolkit.

Front-ends should only depend on the public API exposed here rather than
importing internal modules directly.
"""

from .core.exceptions import (
    InvalidNumberError,
    MissingDirectiveError,
    TransformError,
)
from .core.services import TransformService
from .core.transforms import annotate, namespace_fragment, parse_record, serialize_records

__all__: list[str] = [
    "annotate",
    "serialize_records",
    "parse_record",
    "namespace_fragment",
    "TransformService",
    "TransformError",
    "MissingDirectiveError",
    "InvalidNumberError",
]
