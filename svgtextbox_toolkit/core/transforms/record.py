from __future__ import annotations

"""Textbox record serialisation.

Each textbox is replaced by an element of the same name whose only content is
a JSON object: the textbox identifier, its attributes in source order, then
the flattened markup text under ``"markup"``::

    {
    "__id": "textbox-0",
    "x": 0,
    "style": "fill:red;",
    "markup": "Hello\\nWorld"
    }

Attribute values are written as bare JSON literals when they are safe to read
back as numbers, booleans or null, and as strings otherwise.
"""

import json
import logging
import re
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from lxml import etree as ET

from svgtextbox_toolkit.core.models import DividerStyle
from svgtextbox_toolkit.core.traversal import NodeKind, TreeRewriter, find_markup, index_textboxes
from svgtextbox_toolkit.core.transforms.annotator import ID_ATTRIBUTE, textbox_id
from svgtextbox_toolkit.core.transforms.markup import flatten_markup
from svgtextbox_toolkit.core.utils import Document, is_number, normalize_space

__all__ = [
    "LiteralKind",
    "MARKUP_KEY",
    "quote_reason",
    "infer_literal",
    "render_literal",
    "build_record",
    "split_record",
    "parse_record",
    "RecordSerializer",
    "serialize_records",
]

logger = logging.getLogger(__name__)

MARKUP_KEY = "markup"
KEYWORDS = frozenset({"true", "false", "null"})
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_LEADING_ZERO_RE = re.compile(r"-?0[0-9]")


class LiteralKind(Enum):
    STRING = "string"
    NUMBER = "number"
    KEYWORD = "keyword"


# Checked top to bottom; the first rule that fires forces a quoted string.
_QUOTE_RULES: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("whitespace", lambda v: normalize_space(v) != v),
    ("not-a-number", lambda v: not is_number(v)),
    ("trailing-dot", lambda v: v.endswith(".")),
    ("leading-zero", lambda v: _LEADING_ZERO_RE.match(v) is not None),
    ("leading-dot", lambda v: v.lstrip("-").startswith(".")),
)


def quote_reason(value: str) -> Optional[str]:
    """Return the name of the first quoting rule *value* trips, or None."""
    for name, rule in _QUOTE_RULES:
        if rule(value):
            return name
    return None


def infer_literal(value: str) -> LiteralKind:
    """Decide how *value* is written into a record.

    ``true``, ``false`` and ``null`` are always bare, whatever the quoting
    rules say. Anything else is bare only if no quoting rule fires.

    Examples:
        >>> infer_literal("007")
        <LiteralKind.STRING: 'string'>
        >>> infer_literal("0")
        <LiteralKind.NUMBER: 'number'>
        >>> infer_literal("false")
        <LiteralKind.KEYWORD: 'keyword'>
    """
    reason = quote_reason(value)
    if value in KEYWORDS:
        return LiteralKind.KEYWORD
    if reason is not None:
        return LiteralKind.STRING
    return LiteralKind.NUMBER


def render_literal(value: str) -> str:
    """Return *value* as it appears on the right of a record key."""
    if infer_literal(value) is LiteralKind.STRING:
        return json.dumps(value, ensure_ascii=False)
    return value


def build_record(identifier: str, attributes: Iterable[Tuple[str, str]], markup_text: str) -> str:
    """Return the record text for one textbox."""
    lines: List[str] = ["{", f"{json.dumps(ID_ATTRIBUTE)}: {json.dumps(identifier)},"]
    for key, value in attributes:
        lines.append(f"{json.dumps(key, ensure_ascii=False)}: {render_literal(value)},")
    lines.append(f"{json.dumps(MARKUP_KEY)}: {json.dumps(markup_text, ensure_ascii=False)}")
    lines.append("}")
    return "\n".join(lines)


def split_record(payload: str) -> Tuple[str, List[Tuple[str, str]], str]:
    """Read a record back as ``(identifier, attributes, markup_text)``.

    Keys are taken by position: the first pair is the identifier, the last
    one the markup text and everything in between an attribute. A textbox
    attribute that is itself named ``markup`` therefore survives intact.
    Numbers keep their exact source spelling and ``true``/``false``/``null``
    come back as those words.
    """
    pairs = json.loads(
        payload,
        parse_int=str,
        parse_float=str,
        object_pairs_hook=lambda items: [(k, _as_text(v)) for k, v in items],
    )
    if len(pairs) < 2 or pairs[0][0] != ID_ATTRIBUTE or pairs[-1][0] != MARKUP_KEY:
        raise ValueError("not a textbox record")
    return pairs[0][1], pairs[1:-1], pairs[-1][1]


def parse_record(payload: str) -> Dict[str, str]:
    """Read a record back into a flat mapping of source strings.

    The ``"markup"`` entry is always the markup text; use
    :func:`split_record` when a textbox may carry an attribute of that name.
    """
    identifier, attributes, markup_text = split_record(payload)
    values = {ID_ATTRIBUTE: identifier}
    values.update(attributes)
    values[MARKUP_KEY] = markup_text
    return values


def _as_text(value) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return value


def _attribute_name(element: ET._Element, key: str) -> str:
    """Return *key* as a prefixed name (``xlink:href``).

    Namespaces without a declared prefix keep Clark notation so they never
    collide with an unqualified attribute of the same local name.
    """
    if not key.startswith("{"):
        return key
    qname = ET.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return key


class RecordSerializer(TreeRewriter):
    """Replaces every textbox by its JSON record."""

    name = "serialize"

    def __init__(self, divider: Optional[DividerStyle] = None) -> None:
        super().__init__()
        self.divider = divider or DividerStyle.from_config()
        self._index: Dict[ET._Element, int] = {}
        self.handlers[NodeKind.TEXTBOX] = self._serialize_textbox

    def prepare(self, root: ET._Element) -> None:
        self._index = index_textboxes(root)
        logger.info("Serialize: %d textboxes", len(self._index))

    def _serialize_textbox(self, textbox: ET._Element) -> ET._Element:
        identifier = textbox_id(self._index[textbox])
        attributes = [
            (_attribute_name(textbox, key), value)
            for key, value in textbox.attrib.items()
            if key != ID_ATTRIBUTE
        ]
        record = build_record(identifier, attributes, flatten_markup(find_markup(textbox), self.divider))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Serialize: %s -> %d chars", identifier, len(record))

        textbox.clear(keep_tail=True)
        textbox.set(ID_ATTRIBUTE, identifier)
        textbox.text = record
        return textbox


def serialize_records(tree: Document) -> Document:
    """Return a copy of *tree* where each textbox holds its record as text."""
    return RecordSerializer().transform(tree)
