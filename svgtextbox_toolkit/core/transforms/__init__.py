"""The three document passes: identity annotation, record serialisation and
fragment namespacing."""

from .annotator import IdentityAnnotator, annotate
from .namespacer import FragmentNamespacer, namespace_fragment
from .record import RecordSerializer, parse_record, serialize_records, split_record

__all__ = [
    "IdentityAnnotator",
    "annotate",
    "RecordSerializer",
    "serialize_records",
    "parse_record",
    "split_record",
    "FragmentNamespacer",
    "namespace_fragment",
]
