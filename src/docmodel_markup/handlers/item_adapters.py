"""In-place element rewriting for list-like and dict-like containers.

The handler does not know element types; it only needs to replace each
element (or each value) with whatever the transform returns. Keys of
mappings are never touched.
"""
from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence
from typing import Any, Callable, Optional

__all__ = ["handle_list_items", "handle_dict_items", "build_item_adapter"]

Transform = Callable[[Any], Any]
ItemAdapter = Callable[[Transform], None]


def handle_list_items(items: MutableSequence, transform: Transform) -> None:
    for i in range(len(items)):
        items[i] = transform(items[i])


def handle_dict_items(mapping: MutableMapping, transform: Transform) -> None:
    # Snapshot keys: assigning values while iterating a live view is unsafe.
    for key in list(mapping):
        mapping[key] = transform(mapping[key])


def build_item_adapter(value: Any) -> Optional[ItemAdapter]:
    """Return an adapter applying a transform to every item of `value`.

    Only mutable mappings and mutable sequences (excluding text and bytes
    types) are adapted. Any other shape returns None and is left to object
    recursion by the caller.
    """
    if isinstance(value, MutableMapping):
        return lambda transform: handle_dict_items(value, transform)
    if isinstance(value, MutableSequence) and not isinstance(value, (str, bytes, bytearray)):
        return lambda transform: handle_list_items(value, transform)
    return None
