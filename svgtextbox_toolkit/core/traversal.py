from __future__ import annotations

"""Node classification and the copy-with-override tree walk shared by all passes.

Every pass copies its input first and rewrites the copy, so the caller's tree
is never touched. A pass is a :class:`TreeRewriter` subclass registering one
handler per :class:`NodeKind` it cares about; everything else is kept as is.
"""

import copy
import logging
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Union

from lxml import etree as ET

from svgtextbox_toolkit.core.utils import Document

__all__ = [
    "NodeKind",
    "TEXTBOX",
    "MARKUP",
    "local_name",
    "classify",
    "iter_child_nodes",
    "append_text",
    "find_markup",
    "index_textboxes",
    "TreeRewriter",
]

logger = logging.getLogger(__name__)

TEXTBOX = "textbox"
MARKUP = "markup"
LINE_BREAK = "br"
PRESERVED_SPACE = "preserved-space"
DIVIDER = "divider"


class NodeKind(Enum):
    ELEMENT = "element"
    TEXTBOX = "textbox"
    MARKUP = "markup"
    MARKUP_TEXT = "markup-text"
    LINE_BREAK = "line-break"
    PRESERVED_SPACE = "preserved-space"
    DIVIDER = "divider"
    OTHER = "other"  # comments and processing instructions


_MARKER_KINDS = {
    LINE_BREAK: NodeKind.LINE_BREAK,
    PRESERVED_SPACE: NodeKind.PRESERVED_SPACE,
    DIVIDER: NodeKind.DIVIDER,
}

Node = Union[str, ET._Element]
Handler = Callable[[ET._Element], Optional[ET._Element]]


def local_name(node: ET._Element) -> str:
    """Return the tag of *node* without its namespace ('' for comments and PIs)."""
    if not isinstance(node.tag, str):
        return ""
    return ET.QName(node).localname


def classify(node: Node, in_markup: bool = False) -> NodeKind:
    """Return the kind of *node*; marker names only count inside markup."""
    if isinstance(node, str):
        return NodeKind.MARKUP_TEXT
    name = local_name(node)
    if not name:
        return NodeKind.OTHER
    if in_markup:
        return _MARKER_KINDS.get(name, NodeKind.ELEMENT)
    if name == TEXTBOX:
        return NodeKind.TEXTBOX
    if name == MARKUP:
        return NodeKind.MARKUP
    return NodeKind.ELEMENT


def iter_child_nodes(element: ET._Element) -> Iterator[Node]:
    """Yield the child nodes of *element* in document order.

    lxml keeps character data in ``.text`` and ``.tail``; this restores the
    DOM view where text runs are nodes of their own.
    """
    if element.text:
        yield element.text
    for child in element:
        yield child
        if child.tail:
            yield child.tail


def append_text(parent: ET._Element, text: str) -> None:
    """Append *text* after the current last node of *parent*."""
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def find_markup(textbox: ET._Element) -> Optional[ET._Element]:
    """Return the first markup descendant of *textbox*, if any."""
    for element in textbox.iterdescendants(ET.Element):
        if local_name(element) == MARKUP:
            return element
    return None


def index_textboxes(root: ET._Element) -> Dict[ET._Element, int]:
    """Map every textbox under *root* to its zero-based document-order index.

    One walk over the tree. Textboxes nested inside another textbox are not
    counted because passes drop them together with their parent's content.
    """
    index: Dict[ET._Element, int] = {}

    def _walk(element: ET._Element) -> None:
        if local_name(element) == TEXTBOX:
            index[element] = len(index)
            return
        for child in element:
            _walk(child)

    _walk(root)
    return index


class TreeRewriter:
    """Generic copy-with-override traversal.

    Subclasses fill :attr:`handlers`. A handler returning None lets the walk
    continue into the node's children; returning an element (the node itself
    or a replacement) marks the subtree as final.
    """

    name = "copy"

    def __init__(self) -> None:
        self.handlers: Dict[NodeKind, Handler] = {}

    def prepare(self, root: ET._Element) -> None:
        """Hook called with the copied root before the walk starts."""

    def transform(self, source: Document) -> Document:
        """Return a rewritten copy of *source* (tree in, tree out; element in, element out)."""
        result = copy.deepcopy(source)
        root = result.getroot() if isinstance(result, ET._ElementTree) else result
        self.prepare(root)
        new_root = self._visit(root)
        if new_root is not root:
            if isinstance(result, ET._ElementTree):
                result._setroot(new_root)
            else:
                result = new_root
        logger.debug("%s: rewrite complete", self.name)
        return result

    def _visit(self, node: ET._Element) -> ET._Element:
        handler = self.handlers.get(classify(node))
        if handler is not None:
            replacement = handler(node)
            if replacement is not None:
                return replacement
        for child in list(node):
            new_child = self._visit(child)
            if new_child is not child:
                new_child.tail = child.tail
                node.replace(child, new_child)
        return node
