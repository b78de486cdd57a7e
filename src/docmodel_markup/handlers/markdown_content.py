"""Graph walker rendering every markdown content field of a document model.

`MarkdownContentHandler.handle(obj, context)` visits a model in place:

    1. None -> None; a missing context or host raises InvalidArgumentError
    2. `context.skip_markup` -> input returned untouched, host never called
    3. A root string is treated as content and its rendering returned
    4. Lists and dicts -> every element / value handled in place
    5. Models -> fields visited in dispatch plan order:
        - content fields, and placeholder strings when placeholder mode is
          on, are rendered and written back with `setattr`
        - scalars (other strings, numbers, enums, dates) are left alone
        - lists and dicts are adapted item by item
        - anything else is recursed into

Strings found as list items or dict values are not tagged and are left as
they are, except placeholder strings when placeholder mode is on. The
traversal mutates the model; it does not build a copy.

Several threads may share one handler as long as each traversal has its own
model graph and context. Only the dispatch plan registry is shared.
"""
from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from ..errors import InvalidArgumentError
from .content_transformer import is_placeholder_content, markup
from .handle_context import HandleModelAttributesContext
from .item_adapters import build_item_adapter
from .property_cache import FieldDescriptor, PropertyDescriptorCache

__all__ = ["MarkdownContentHandler"]

_LEAF_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    Enum,
    date,
    time,
    timedelta,
    UUID,
)


class MarkdownContentHandler:
    """Render `MarkdownContent` fields across an arbitrary model graph."""

    def __init__(self, cache: Optional[PropertyDescriptorCache] = None):
        self.cache = cache if cache is not None else PropertyDescriptorCache()

    def handle(self, obj: Any, context: Optional[HandleModelAttributesContext]) -> Any:
        if obj is None:
            return None
        if context is None:
            raise InvalidArgumentError("context")
        if context.host is None:
            raise InvalidArgumentError("context.host")
        if context.skip_markup:
            return obj
        if isinstance(obj, str):
            return markup(obj, context)
        return self._handle_value(obj, context)

    def _handle_item(self, item: Any, context: HandleModelAttributesContext) -> Any:
        if context.enable_content_placeholder and is_placeholder_content(item):
            return markup(item, context)
        if item is None or isinstance(item, _LEAF_TYPES):
            return item
        return self._handle_value(item, context)

    def _handle_value(self, obj: Any, context: HandleModelAttributesContext) -> Any:
        adapter = build_item_adapter(obj)
        if adapter is not None:
            adapter(lambda item: self._handle_item(item, context))
            return obj

        for descriptor in self.cache.fields_of(type(obj)):
            self._handle_field(obj, descriptor, context)
        return obj

    def _handle_field(
        self,
        obj: Any,
        descriptor: FieldDescriptor,
        context: HandleModelAttributesContext,
    ) -> None:
        value = getattr(obj, descriptor.name, None)
        if self._should_handle(value, descriptor, context):
            rendered = markup(value, context, field_name=self._qualname(descriptor))
            if rendered is not value:
                setattr(obj, descriptor.name, rendered)
            return
        if value is None or isinstance(value, _LEAF_TYPES):
            return
        self._handle_value(value, context)

    @staticmethod
    def _should_handle(
        value: Any, descriptor: FieldDescriptor, context: HandleModelAttributesContext
    ) -> bool:
        if context.enable_content_placeholder and is_placeholder_content(value):
            return True
        return descriptor.is_content

    @staticmethod
    def _qualname(descriptor: FieldDescriptor) -> str:
        return f"{descriptor.owner.__qualname__}.{descriptor.name}"
