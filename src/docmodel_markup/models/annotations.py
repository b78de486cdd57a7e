"""Field markers consumed by the markdown content handler.

Document models declare content fields with `typing.Annotated`:

    class ManagedReference(BaseModel):
        uid: str
        summary: MarkdownField = None
        raw: Annotated[Optional[str], MarkdownContentIgnore()] = None

Both the marker class and an instance of it are accepted as metadata. The
marker may wrap the whole field type or one member of a union, so
`Optional[Annotated[str, MarkdownContent()]]` is a content field too. The
same markers work on dataclass fields.
"""
from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, Iterable, Optional, Tuple, Union, get_args, get_origin

__all__ = [
    "MarkdownContent",
    "MarkdownContentIgnore",
    "MarkdownField",
    "annotation_metadata",
    "has_marker",
]


@dataclass(frozen=True)
class MarkdownContent:
    """Mark a string field whose value is markdown to be rendered."""

    pass


@dataclass(frozen=True)
class MarkdownContentIgnore:
    """Exclude a field from markdown handling, including recursion into it."""

    pass


# Type alias for the common optional content field
MarkdownField = Annotated[Optional[str], MarkdownContent()]


def annotation_metadata(annotation: Any) -> Tuple[Any, ...]:
    """Collect `Annotated` metadata of a type and of its union members."""
    found: Tuple[Any, ...] = tuple(getattr(annotation, "__metadata__", ()))
    if get_origin(annotation) in (Union, types.UnionType):
        for arg in get_args(annotation):
            found += tuple(getattr(arg, "__metadata__", ()))
    return found


def has_marker(metadata: Iterable[Any], marker: type) -> bool:
    """Return True when `metadata` holds `marker` as a class or an instance."""
    return any(m is marker or isinstance(m, marker) for m in metadata)
