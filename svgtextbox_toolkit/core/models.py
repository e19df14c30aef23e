from __future__ import annotations

"""Shared data structures used across the transforms.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, service, command line).
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from svgtextbox_toolkit.config import ConfigManager
from svgtextbox_toolkit.core.exceptions import InvalidNumberError, MissingDirectiveError
from svgtextbox_toolkit.core.utils import Document, format_number, read_processing_instruction

__all__ = ["DividerStyle", "DirectiveNames", "FragmentDirectives"]


@dataclass(frozen=True)
class DividerStyle:
    """Appearance of the ``<divider/>`` marker.

    Attributes
    ----------
    tag
        Name of the styling element wrapping the separator in annotated markup.
    attributes
        Attributes placed on that styling element.
    text
        Separator characters; also the marker's contribution to record text.
    """

    tag: str = "span"
    attributes: Dict[str, str] = field(default_factory=dict)
    text: str = "———"

    @classmethod
    def from_config(cls) -> "DividerStyle":
        cfg = ConfigManager().get_divider_config()
        default = cls()
        return cls(
            tag=str(cfg.get("tag") or default.tag),
            attributes={str(k): str(v) for k, v in (cfg.get("attributes") or {}).items()},
            text=str(cfg.get("text", default.text)),
        )


@dataclass(frozen=True)
class DirectiveNames:
    """Processing-instruction targets carrying the fragment directives."""

    prefix: str = "svgtextbox-prefix"
    x_offset: str = "svgtextbox-x_offset"
    y_offset: str = "svgtextbox-y_offset"

    @classmethod
    def from_config(cls) -> "DirectiveNames":
        cfg = ConfigManager().get_directive_names()
        default = cls()
        return cls(
            prefix=cfg.get("prefix") or default.prefix,
            x_offset=cfg.get("x_offset") or default.x_offset,
            y_offset=cfg.get("y_offset") or default.y_offset,
        )


@dataclass(frozen=True)
class FragmentDirectives:
    """Directive values for one fragment namespacing run.

    Values are kept as the raw strings supplied; they are only checked when
    a rewrite rule actually needs them.
    """

    prefix: Optional[str] = None
    x_offset: Optional[str] = None
    y_offset: Optional[str] = None
    names: DirectiveNames = field(default_factory=DirectiveNames)

    @classmethod
    def from_document(cls, document: Document, names: Optional[DirectiveNames] = None) -> "FragmentDirectives":
        """Resolve every directive from *document* in one go."""
        names = names or DirectiveNames.from_config()
        return cls(
            prefix=read_processing_instruction(document, names.prefix),
            x_offset=read_processing_instruction(document, names.x_offset),
            y_offset=read_processing_instruction(document, names.y_offset),
            names=names,
        )

    def require_prefix(self) -> str:
        if not self.prefix:
            raise MissingDirectiveError(self.names.prefix)
        return self.prefix.strip()

    def translate(self) -> str:
        """Return the ``translate(x,y)`` transform for the offsets.

        Raises
        ------
        MissingDirectiveError
            If either offset is absent.
        InvalidNumberError
            If an offset is present but not numeric after trimming.
        """
        x = self._number(self.names.x_offset, self.x_offset)
        y = self._number(self.names.y_offset, self.y_offset)
        return f"translate({x},{y})"

    @staticmethod
    def _number(name: str, value: Optional[str]) -> str:
        if value is None:
            raise MissingDirectiveError(name)
        try:
            return format_number(value)
        except ValueError as exc:
            raise InvalidNumberError(name, value) from exc
