"""Exception types raised while handling markdown content on document models.

Both concrete errors are fatal for the current traversal. They are raised to
the caller unmodified; the handlers never log-and-continue on a contract
violation.
"""
from __future__ import annotations

__all__ = [
    "DocModelMarkupError",
    "InvalidArgumentError",
    "UnsupportedContentTypeError",
]


class DocModelMarkupError(Exception):
    """Base class for all errors raised by docmodel-markup."""


class InvalidArgumentError(DocModelMarkupError, ValueError):
    """A required argument (context or markup host) was not supplied."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} must not be None")


class UnsupportedContentTypeError(DocModelMarkupError, TypeError):
    """A field tagged as markdown content holds a non-string value."""

    def __init__(self, value_type: type, field_name: str | None = None):
        self.value_type = value_type
        self.field_name = field_name
        where = f" (field {field_name!r})" if field_name else ""
        super().__init__(
            f"Type {value_type.__module__}.{value_type.__qualname__} is NOT a "
            f"supported type for MarkdownContent{where}"
        )
