from __future__ import annotations

"""Simple reusable helper functions.

These helpers are side-effect-free apart from :func:`save_xml_file`; they can be
used across all layers of the toolkit.
"""

from decimal import Decimal
from typing import Optional, Union
import logging
import re

from lxml import etree as ET

__all__ = [
    "normalize_space",
    "is_number",
    "format_number",
    "read_processing_instruction",
    "parse_document",
    "serialize_document",
    "save_xml_file",
]

logger = logging.getLogger(__name__)

# XPath 1.0 whitespace and Number grammar (ASCII digits only)
_WHITESPACE_RE = re.compile(r"[ \t\r\n]+")
_NUMBER_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

Document = Union[ET._ElementTree, ET._Element]


def normalize_space(text: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and trim both ends.

    Mirrors XPath ``normalize-space()``: only space, tab, CR and LF count as
    whitespace. Applying it twice gives the same result as applying it once.

    Examples:
        >>> normalize_space("  Hello \\n   World ")
        'Hello World'
        >>> normalize_space(None)
        ''
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip(" ")


def is_number(text: str) -> bool:
    """Return True if *text* is an XPath number literal without surrounding space."""
    return _NUMBER_RE.fullmatch(text) is not None


def format_number(text: str) -> str:
    """Return the canonical string form of the number in *text*.

    Surrounding whitespace is ignored. Integral values lose their fractional
    part (``"10.0"`` -> ``"10"``) and trailing zeros are dropped.

    Raises
    ------
    ValueError
        If *text* is not a number once trimmed.
    """
    value = normalize_space(text)
    if not is_number(value):
        raise ValueError(f"not a number: {text!r}")
    number = Decimal(value)
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")


def read_processing_instruction(document: Document, target: str) -> Optional[str]:
    """Return the normalised value of the first ``<?target ...?>`` in *document*.

    The whole document is searched, including processing instructions placed
    next to the root element. Returns None when no such instruction exists.
    """
    found = document.xpath(f"//processing-instruction('{target}')")
    if not found:
        return None
    return normalize_space(found[0].text)


def parse_document(data: bytes) -> ET._ElementTree:
    """Parse *data* into an lxml element tree, keeping comments and PIs."""
    parser = ET.XMLParser(remove_comments=False, remove_pis=False, resolve_entities=False)
    root = ET.fromstring(data, parser)
    return root.getroottree()


def serialize_document(document: Document, *, pretty: bool = False) -> bytes:
    """Serialise *document* to UTF-8 bytes with an XML declaration."""
    if isinstance(document, ET._Element):
        document = document.getroottree()
    return ET.tostring(document, pretty_print=pretty, xml_declaration=True, encoding="UTF-8")


def save_xml_file(document: Document, path: str, *, pretty: bool = False) -> None:
    """Write *document* to *path* with an XML declaration."""
    xml_bytes = serialize_document(document, pretty=pretty)
    try:
        with open(path, "wb") as fh:
            fh.write(xml_bytes)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote XML path=%s bytes=%d", path, len(xml_bytes))
    except OSError:
        logger.error("I/O FAIL: write XML path=%s", path, exc_info=True)
        raise
