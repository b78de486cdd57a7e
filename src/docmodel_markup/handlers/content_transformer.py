"""Rendering policy for a single markdown value.

`markup` is the only place that calls the markup host and the only place
that mutates the handler context. Placeholder values (``*content`` once
trimmed) are swapped for the context's placeholder text without invoking the
host, which lets overwrite documents mark where the original content goes.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from ..errors import UnsupportedContentTypeError
from .handle_context import HandleModelAttributesContext

logger = logging.getLogger(__name__)

CONTENT_PLACEHOLDER = "*content"

__all__ = ["CONTENT_PLACEHOLDER", "is_placeholder_content", "markup"]


def is_placeholder_content(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == CONTENT_PLACEHOLDER


def markup(
    value: Any,
    context: HandleModelAttributesContext,
    *,
    field_name: Optional[str] = None,
) -> Any:
    """Render `value` through the context's host and merge returned links.

    Args:
        value: Markdown text; None and "" are returned unchanged
        context: Traversal context holding the host and link accumulators
        field_name: Name of the field being rendered, used in error messages

    Returns:
        Rendered HTML, or the placeholder content for placeholder values

    Raises:
        UnsupportedContentTypeError: `value` is neither None nor a string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise UnsupportedContentTypeError(type(value), field_name)
    if not value:
        return value

    if context.enable_content_placeholder and is_placeholder_content(value):
        context.contains_placeholder = True
        return context.placeholder_content

    result = context.host.markup(value, context.file_and_type)
    context.add_markup_result(result)
    logger.debug(
        "Rendered %s (%d chars): %d uid link(s), %d file link(s)",
        field_name or "<value>",
        len(value),
        len(result.link_to_uids),
        len(result.link_to_files),
    )
    return result.html
