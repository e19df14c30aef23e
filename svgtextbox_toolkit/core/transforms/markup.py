from __future__ import annotations

"""Markup normalisation shared by the annotator and the record serializer.

Inside a textbox's markup subtree:

* text runs are whitespace-normalised one run at a time;
* ``<br/>`` becomes a line feed;
* ``<preserved-space/>`` becomes exactly one space, never collapsed;
* ``<divider/>`` becomes the configured separator, wrapped in a styling
  element in annotated markup and as bare characters in extracted text;
* any other inline element (``<span>``, ``<b>``...) keeps its tag and
  attributes while its own content goes through the same rules.

Comments and processing instructions inside markup carry no display text and
are dropped.
"""

from typing import List, Optional

from lxml import etree as ET

from svgtextbox_toolkit.core.models import DividerStyle
from svgtextbox_toolkit.core.traversal import NodeKind, append_text, classify, iter_child_nodes
from svgtextbox_toolkit.core.utils import normalize_space

__all__ = ["copy_markup", "flatten_markup"]


def copy_markup(markup: ET._Element, divider: Optional[DividerStyle] = None) -> ET._Element:
    """Return a processed copy of *markup*, detached from any tree."""
    divider = divider or DividerStyle.from_config()
    target = ET.Element(markup.tag, attrib=dict(markup.attrib), nsmap=markup.nsmap)
    _fill(target, markup, divider)
    return target


def flatten_markup(markup: Optional[ET._Element], divider: Optional[DividerStyle] = None) -> str:
    """Return the normalised text value of *markup*.

    Equal to the text content of :func:`copy_markup` applied to the same
    element, so both passes agree on what a textbox says.
    """
    if markup is None:
        return ""
    divider = divider or DividerStyle.from_config()
    parts: List[str] = []
    _collect(markup, divider, parts)
    return "".join(parts)


def _fill(target: ET._Element, source: ET._Element, divider: DividerStyle) -> None:
    for node in iter_child_nodes(source):
        kind = classify(node, in_markup=True)
        if kind is NodeKind.MARKUP_TEXT:
            append_text(target, normalize_space(node))
        elif kind is NodeKind.LINE_BREAK:
            append_text(target, "\n")
        elif kind is NodeKind.PRESERVED_SPACE:
            append_text(target, " ")
        elif kind is NodeKind.DIVIDER:
            wrapper = ET.SubElement(target, _in_namespace_of(target, divider.tag), attrib=divider.attributes)
            wrapper.text = divider.text
        elif kind is NodeKind.ELEMENT:
            child = ET.SubElement(target, node.tag, attrib=dict(node.attrib))
            _fill(child, node, divider)


def _collect(source: ET._Element, divider: DividerStyle, parts: List[str]) -> None:
    for node in iter_child_nodes(source):
        kind = classify(node, in_markup=True)
        if kind is NodeKind.MARKUP_TEXT:
            parts.append(normalize_space(node))
        elif kind is NodeKind.LINE_BREAK:
            parts.append("\n")
        elif kind is NodeKind.PRESERVED_SPACE:
            parts.append(" ")
        elif kind is NodeKind.DIVIDER:
            parts.append(divider.text)
        elif kind is NodeKind.ELEMENT:
            _collect(node, divider, parts)


def _in_namespace_of(element: ET._Element, tag: str) -> str:
    namespace = ET.QName(element).namespace
    return f"{{{namespace}}}{tag}" if namespace else tag
