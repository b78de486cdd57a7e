"""Public facade for rendering markdown content on document models.

This module provides the stable public API for hosts of the documentation
pipeline. All traversal logic is delegated to
`docmodel_markup.handlers.markdown_content`; this layer builds the per-document
context from `Settings`, runs the shared handler and packages the collected
link metadata.

Public Functions:
    build_context: Create a HandleModelAttributesContext seeded from settings
    handle_model_markdown: Render a model in place and return collected links
    default_handler: Process-wide shared MarkdownContentHandler
    warm_up: Build dispatch plans for known model types ahead of traffic
    resolve_type: Import a class from its dotted path
"""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from .config import Settings, get_settings
from .handlers.base import ModelAttributeHandler
from .handlers.handle_context import HandleModelAttributesContext
from .handlers.markdown_content import MarkdownContentHandler
from .models.markup import FileAndType, LinkSourceInfo, MarkupHost

logger = logging.getLogger(__name__)

__all__ = [
    "MarkedModel",
    "build_context",
    "handle_model_markdown",
    "default_handler",
    "warm_up",
    "resolve_type",
]

_DEFAULT_HANDLER = MarkdownContentHandler()


@dataclass
class MarkedModel:
    model: Any
    link_to_uids: Set[str] = field(default_factory=set)
    link_to_files: Set[str] = field(default_factory=set)
    uid_link_sources: Dict[str, List[LinkSourceInfo]] = field(default_factory=dict)
    file_link_sources: Dict[str, List[LinkSourceInfo]] = field(default_factory=dict)
    contains_placeholder: bool = False


def default_handler() -> MarkdownContentHandler:
    return _DEFAULT_HANDLER


def build_context(
    host: Optional[MarkupHost],
    file_and_type: Optional[FileAndType],
    *,
    settings: Optional[Settings] = None,
    skip_markup: Optional[bool] = None,
    enable_content_placeholder: Optional[bool] = None,
    placeholder_content: Optional[str] = None,
) -> HandleModelAttributesContext:
    """Create a fresh context, falling back to settings for unspecified flags."""
    settings = settings or get_settings()
    return HandleModelAttributesContext(
        host=host,
        file_and_type=file_and_type,
        skip_markup=settings.SKIP_MARKUP if skip_markup is None else skip_markup,
        enable_content_placeholder=(
            settings.ENABLE_CONTENT_PLACEHOLDER
            if enable_content_placeholder is None
            else enable_content_placeholder
        ),
        placeholder_content=(
            settings.PLACEHOLDER_CONTENT if placeholder_content is None else placeholder_content
        ),
    )


def handle_model_markdown(
    model: Any,
    host: MarkupHost,
    file_and_type: Optional[FileAndType] = None,
    *,
    settings: Optional[Settings] = None,
    handler: Optional[ModelAttributeHandler] = None,
    skip_markup: Optional[bool] = None,
    enable_content_placeholder: Optional[bool] = None,
    placeholder_content: Optional[str] = None,
) -> MarkedModel:
    """Render every markdown content field of `model` in place.

    Args:
        model: Document model (or any nested value) to handle
        host: Markup engine used for rendering
        file_and_type: Identity of the source file, passed to the host
        settings: Settings used for unspecified context flags (defaults to get_settings())
        handler: Handler to run; the shared default handler when omitted
        skip_markup: Override of SKIP_MARKUP for this document
        enable_content_placeholder: Override of ENABLE_CONTENT_PLACEHOLDER
        placeholder_content: Override of PLACEHOLDER_CONTENT

    Returns:
        MarkedModel holding the handled model and the link metadata collected
        from every host call

    Raises:
        InvalidArgumentError: `host` is None
        UnsupportedContentTypeError: A content field holds a non-string value
    """
    context = build_context(
        host,
        file_and_type,
        settings=settings,
        skip_markup=skip_markup,
        enable_content_placeholder=enable_content_placeholder,
        placeholder_content=placeholder_content,
    )
    handler = handler or _DEFAULT_HANDLER
    handled = handler.handle(model, context)
    logger.debug(
        "Handled markdown for %s: %d uid link(s), %d file link(s), placeholder=%s",
        file_and_type.file if file_and_type else "<unknown>",
        len(context.link_to_uids),
        len(context.link_to_files),
        context.contains_placeholder,
    )
    return MarkedModel(
        model=handled,
        link_to_uids=context.link_to_uids,
        link_to_files=context.link_to_files,
        uid_link_sources=context.uid_link_sources,
        file_link_sources=context.file_link_sources,
        contains_placeholder=context.contains_placeholder,
    )


def resolve_type(path: str) -> type:
    """Import `module.Class` (or `module:Class`) and return the class."""
    module_name, sep, attr = path.replace(":", ".").rpartition(".")
    if not sep or not module_name:
        raise ValueError(f"Expected a dotted path 'module.Class', got {path!r}")
    obj = getattr(importlib.import_module(module_name), attr)
    if not isinstance(obj, type):
        raise TypeError(f"{path!r} does not name a class")
    return obj


def warm_up(
    handler: Optional[MarkdownContentHandler] = None,
    types: Optional[Iterable[type | str]] = None,
    *,
    settings: Optional[Settings] = None,
) -> int:
    """Build dispatch plans up front so traversals only read the cache.

    `types` defaults to PLAN_CACHE_PRELOAD_TYPES. Returns the number of plans
    now cached by the handler.
    """
    handler = handler or _DEFAULT_HANDLER
    if types is None:
        types = (settings or get_settings()).PLAN_CACHE_PRELOAD_TYPES
    for entry in types:
        cls = resolve_type(entry) if isinstance(entry, str) else entry
        handler.cache.plan_for(cls)
    logger.info("Dispatch plan cache warmed: %d type(s)", len(handler.cache))
    return len(handler.cache)
