from __future__ import annotations

"""Textbox identity annotation.

Copies a document unchanged except for its ``<textbox>`` elements, which get
an ``__id`` attribute of the form ``textbox-<n>`` (n = position among all
textboxes in document order) ahead of their own attributes, and keep only
their processed markup child.
"""

import logging
from typing import Dict, Optional

from lxml import etree as ET

from svgtextbox_toolkit.core.models import DividerStyle
from svgtextbox_toolkit.core.traversal import NodeKind, TreeRewriter, find_markup, index_textboxes
from svgtextbox_toolkit.core.transforms.markup import copy_markup
from svgtextbox_toolkit.core.utils import Document

__all__ = ["ID_ATTRIBUTE", "ID_PREFIX", "textbox_id", "IdentityAnnotator", "annotate"]

logger = logging.getLogger(__name__)

ID_ATTRIBUTE = "__id"
ID_PREFIX = "textbox-"


def textbox_id(index: int) -> str:
    """Return the identifier of the textbox at document position *index*."""
    return f"{ID_PREFIX}{index}"


class IdentityAnnotator(TreeRewriter):
    """Tags every textbox with its document-order identifier."""

    name = "annotate"

    def __init__(self, divider: Optional[DividerStyle] = None) -> None:
        super().__init__()
        self.divider = divider or DividerStyle.from_config()
        self._index: Dict[ET._Element, int] = {}
        self.handlers[NodeKind.TEXTBOX] = self._annotate_textbox

    def prepare(self, root: ET._Element) -> None:
        self._index = index_textboxes(root)
        logger.info("Annotate: %d textboxes", len(self._index))

    def _annotate_textbox(self, textbox: ET._Element) -> ET._Element:
        identifier = textbox_id(self._index[textbox])
        attributes = list(textbox.attrib.items())
        markup = find_markup(textbox)
        processed = copy_markup(markup, self.divider) if markup is not None else None

        textbox.clear(keep_tail=True)
        textbox.set(ID_ATTRIBUTE, identifier)
        for key, value in attributes:
            if key != ID_ATTRIBUTE:
                textbox.set(key, value)
        if processed is not None:
            textbox.append(processed)
        return textbox


def annotate(tree: Document) -> Document:
    """Return a copy of *tree* with every textbox identified and its markup processed."""
    return IdentityAnnotator().transform(tree)
