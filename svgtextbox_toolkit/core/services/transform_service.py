from __future__ import annotations

"""High-level transform service.

Entry-point for any front-end (command line, build pipeline, tests) that needs
to run one of the named passes over a document: parse the input, apply the
pass, serialise the result. The passes themselves stay pure; all I/O lives
here.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

from lxml import etree as ET

from svgtextbox_toolkit.core.exceptions import DocumentParseError, TransformError, UnknownTransformError
from svgtextbox_toolkit.core.transforms import annotate, namespace_fragment, serialize_records
from svgtextbox_toolkit.core.utils import Document, parse_document, save_xml_file, serialize_document

logger = logging.getLogger(__name__)

__all__ = ["TransformService"]

Transform = Callable[..., Document]


class TransformService:
    """Runs named passes over documents."""

    _PASSES: Dict[str, Transform] = {
        "annotate": annotate,
        "serialize": serialize_records,
        "namespace": namespace_fragment,
    }

    def __init__(self) -> None:
        self.logger = logger
        self._passes: Dict[str, Transform] = dict(self._PASSES)

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def available_transforms(self) -> List[str]:
        return sorted(self._passes)

    def register(self, name: str, transform: Transform) -> None:
        """Make *transform* available under *name*, replacing any previous one."""
        self._passes[name] = transform
        self.logger.debug("Registered transform '%s'", name)

    def parse(self, data: bytes) -> ET._ElementTree:
        try:
            return parse_document(data)
        except ET.XMLSyntaxError as e:
            self.logger.error("Document parse failed: %s", e)
            raise DocumentParseError(f"Could not parse document: {e}", cause=e) from e

    def run(self, name: str, tree: Document, **params: Any) -> Document:
        """Apply the pass registered as *name* to *tree*.

        Args:
            name: Name of the pass ("annotate", "serialize", "namespace")
            tree: Parsed document; left untouched
            **params: Directive values for passes that take them

        Returns:
            The transformed copy of *tree*

        Raises:
            UnknownTransformError: If no pass is registered under *name*
            TransformError: If the pass itself fails
        """
        transform = self._passes.get(name)
        if transform is None:
            raise UnknownTransformError(name, self.available_transforms())
        self.logger.info("Transform: running '%s'", name)
        try:
            return transform(tree, **params)
        except TransformError as e:
            self.logger.error("Transform '%s' failed: %s", name, e)
            raise

    def transform_bytes(self, name: str, data: bytes, **params: Any) -> bytes:
        return serialize_document(self.run(name, self.parse(data), **params))

    def transform_file(self, name: str, source: str | Path, destination: str | Path, **params: Any) -> Path:
        """Transform the document at *source* and write the result to *destination*."""
        source = Path(source)
        destination = Path(destination)
        if not source.is_file():
            raise FileNotFoundError(f"Input file not found: {source}")

        self.logger.debug("Transform file: %s -> %s", source, destination)
        result = self.run(name, self.parse(source.read_bytes()), **params)
        save_xml_file(result, str(destination))
        self.logger.info("Transform '%s' written to %s", name, destination)
        return destination
