from __future__ import annotations

"""Fragment namespacing.

Prepares a rendered SVG fragment for embedding next to other fragments:

* ``href="#Xtoken"`` becomes ``href="#<prefix>-token"`` (the first character
  of the referenced id is a kind tag and is dropped);
* ``<symbol id="icon">`` becomes ``id="<prefix>-icon"``;
* ``<g id="surface...">`` becomes ``id="<prefix>-surface"``;
* any element with an ``x`` attribute gets ``transform="translate(x,y)"``
  built from the offset directives.

Directives come from explicit arguments or, failing that, from the
``<?svgtextbox-prefix ...?>`` style processing instructions of the document.
They are resolved once per run and only checked when a rule needs them.
"""

import logging
from typing import Optional, Union

from lxml import etree as ET

from svgtextbox_toolkit.core.models import DirectiveNames, FragmentDirectives
from svgtextbox_toolkit.core.traversal import NodeKind, TreeRewriter, local_name
from svgtextbox_toolkit.core.utils import Document

__all__ = ["FragmentNamespacer", "namespace_fragment"]

logger = logging.getLogger(__name__)

SURFACE = "surface"


class FragmentNamespacer(TreeRewriter):
    """Prefixes ids and references and positions the fragment."""

    name = "namespace"

    def __init__(self, prefix: Optional[str] = None, x_offset: Union[str, float, None] = None,
                 y_offset: Union[str, float, None] = None, names: Optional[DirectiveNames] = None) -> None:
        super().__init__()
        self._explicit = FragmentDirectives(
            prefix=prefix,
            x_offset=None if x_offset is None else str(x_offset),
            y_offset=None if y_offset is None else str(y_offset),
            names=names or DirectiveNames.from_config(),
        )
        self.directives = self._explicit
        self._translate: Optional[str] = None
        self._rewrites = 0
        for kind in (NodeKind.ELEMENT, NodeKind.TEXTBOX, NodeKind.MARKUP):
            self.handlers[kind] = self._rewrite_element

    def resolve_directives(self, source: Document) -> FragmentDirectives:
        """Merge the explicit directives with those found in *source*.

        *source* is the caller's document, so instructions placed next to the
        root are found even when only the root element is passed in.
        """
        explicit = self._explicit
        found = FragmentDirectives.from_document(source, explicit.names)
        return FragmentDirectives(
            prefix=explicit.prefix if explicit.prefix is not None else found.prefix,
            x_offset=explicit.x_offset if explicit.x_offset is not None else found.x_offset,
            y_offset=explicit.y_offset if explicit.y_offset is not None else found.y_offset,
            names=explicit.names,
        )

    def prepare(self, root: ET._Element) -> None:
        self._translate = None
        self._rewrites = 0
        logger.debug("Namespace: directives %s", self.directives)

    def transform(self, source: Document) -> Document:
        self.directives = self.resolve_directives(source)
        result = super().transform(source)
        logger.info("Namespace: %d attributes rewritten", self._rewrites)
        return result

    def _rewrite_element(self, element: ET._Element) -> None:
        tag = local_name(element)
        for key, value in list(element.attrib.items()):
            attr = ET.QName(key).localname
            if attr == "href" and value.startswith("#"):
                element.set(key, f"#{self.directives.require_prefix()}-{value[2:]}")
            elif key == "id" and tag == "symbol":
                element.set(key, f"{self.directives.require_prefix()}-{value}")
            elif key == "id" and tag == "g" and value.startswith(SURFACE):
                element.set(key, f"{self.directives.require_prefix()}-{SURFACE}")
            elif key == "x":
                element.set("transform", self._translation())
            else:
                continue
            self._rewrites += 1
        return None

    def _translation(self) -> str:
        if self._translate is None:
            self._translate = self.directives.translate()
        return self._translate


def namespace_fragment(tree: Document, prefix: Optional[str] = None,
                       x_offset: Union[str, float, None] = None,
                       y_offset: Union[str, float, None] = None) -> Document:
    """Return a namespaced, translated copy of the fragment *tree*.

    Raises
    ------
    MissingDirectiveError
        If a rule fires and the directive it needs is absent.
    InvalidNumberError
        If an offset is present but not numeric.
    """
    return FragmentNamespacer(prefix, x_offset, y_offset).transform(tree)
