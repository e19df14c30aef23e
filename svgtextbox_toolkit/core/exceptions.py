from __future__ import annotations

"""Transform exception classes.

Every failure raised by a pass aborts the whole invocation; no partial tree
is ever returned. Callers catch :class:`TransformError` to handle all of them.
"""

from typing import Optional

__all__ = [
    "TransformError",
    "MissingDirectiveError",
    "InvalidNumberError",
    "UnknownTransformError",
    "DocumentParseError",
]


class TransformError(Exception):
    """Base exception for all transform-related errors."""

    def __init__(self, message: str, directive: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.directive = directive
        self.cause = cause

    def __str__(self) -> str:
        if self.directive:
            return f"[Directive: {self.directive}] {super().__str__()}"
        return super().__str__()


class MissingDirectiveError(TransformError):
    """Raised when a rewrite rule needs a directive the document does not carry."""

    def __init__(self, directive: str) -> None:
        super().__init__(f"Required directive '{directive}' was not found", directive)


class InvalidNumberError(TransformError):
    """Raised when a directive value cannot be coerced to a number."""

    def __init__(self, directive: str, value: str) -> None:
        self.value = value
        super().__init__(f"Value {value!r} is not a number", directive)


class UnknownTransformError(TransformError):
    """Raised when the service is asked for a pass it does not know."""

    def __init__(self, name: str, available: Optional[list[str]] = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Unknown transform '{name}'"
        if self.available:
            message += f". Available transforms: {', '.join(self.available)}"
        super().__init__(message)


class DocumentParseError(TransformError):
    """Raised when input bytes cannot be parsed into a document tree."""
    pass
