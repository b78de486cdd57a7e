"""Model attribute handlers and their supporting helpers.

Modules:
    handle_context: Per-document mutable state (`HandleModelAttributesContext`)
    property_cache: Field discovery and the type -> plan registry
    item_adapters: In-place rewriting of list and dict items
    content_transformer: Placeholder detection and host rendering
    markdown_content: `MarkdownContentHandler`, the graph walker
"""
from __future__ import annotations

from .base import ModelAttributeHandler
from .handle_context import HandleModelAttributesContext
from .markdown_content import MarkdownContentHandler
from .property_cache import FieldDescriptor, PropertyDescriptorCache, TypeDispatchPlan

__all__ = [
    "ModelAttributeHandler",
    "HandleModelAttributesContext",
    "MarkdownContentHandler",
    "FieldDescriptor",
    "PropertyDescriptorCache",
    "TypeDispatchPlan",
]
