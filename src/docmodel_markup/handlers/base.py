"""Contract shared by model attribute handlers.

A handler walks a document model and acts on the fields carrying its
annotation. `handle` must accept the document root as well as any nested
value, because handlers recurse through themselves.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .handle_context import HandleModelAttributesContext

__all__ = ["ModelAttributeHandler"]


@runtime_checkable
class ModelAttributeHandler(Protocol):
    def handle(self, obj: Any, context: HandleModelAttributesContext) -> Any:
        ...
