"""Per-type field discovery and the shared dispatch plan registry.

A dispatch plan lists, in declaration order, the fields of a model type that
the markdown content handler visits. Plans are derived only from the class
declaration, never from instance values, so one plan per type is built on
first use and reused for the life of the registry.

Supported declarations:
    pydantic models: `model_fields`, base-to-derived order. Frozen models and
        `Field(frozen=True)` fields are not writable and are skipped.
    dataclasses: `dataclasses.fields()`. Frozen dataclasses have no plan
        fields.
    anything else: a schema registered up front with `register()`. Types
        without a schema get an empty plan.

Fields annotated with `MarkdownContentIgnore` are dropped from the plan, so
the handler neither renders nor recurses into them.

Concurrency:
    Plans are read without locking. Building happens outside the lock and the
    result is published with a get-or-add under `_lock`, so two threads racing
    on the same type may both build a plan but only one is ever kept.
"""
from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from ..models.annotations import (
    MarkdownContent,
    MarkdownContentIgnore,
    annotation_metadata,
    has_marker,
)

logger = logging.getLogger(__name__)

__all__ = [
    "FieldDescriptor",
    "TypeDispatchPlan",
    "PropertyDescriptorCache",
    "describe_fields",
]


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    owner: type
    is_content: bool = False
    ignored: bool = False


@dataclass(frozen=True)
class TypeDispatchPlan:
    type: type
    fields: Tuple[FieldDescriptor, ...] = ()

    @property
    def content_fields(self) -> Tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.is_content)

    def __len__(self) -> int:
        return len(self.fields)


def _declaring_class(cls: type, name: str) -> type:
    for base in cls.__mro__:
        if base is object or base is BaseModel:
            continue
        if name in inspect.get_annotations(base):
            return base
    return cls


def _describe_pydantic(cls: type) -> List[FieldDescriptor]:
    if cls.model_config.get("frozen"):
        return []
    out: List[FieldDescriptor] = []
    for name, info in cls.model_fields.items():
        if info.frozen:
            continue
        metadata = tuple(info.metadata) + annotation_metadata(info.annotation)
        out.append(
            FieldDescriptor(
                name=name,
                owner=_declaring_class(cls, name),
                is_content=has_marker(metadata, MarkdownContent),
                ignored=has_marker(metadata, MarkdownContentIgnore),
            )
        )
    return out


def _resolve_annotation(cls: type, f: dataclasses.Field) -> Any:
    # String annotations (postponed evaluation) are resolved per field so one
    # unresolvable forward reference does not hide the markers of the others.
    if not isinstance(f.type, str):
        return f.type
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(f.type, globalns, {cls.__name__: cls})
    except NameError as exc:
        logger.debug(
            "Unresolved annotation %r on %s.%s: %s", f.type, cls.__qualname__, f.name, exc
        )
        return None


def _describe_dataclass(cls: type) -> List[FieldDescriptor]:
    if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return []
    out: List[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        metadata = annotation_metadata(_resolve_annotation(cls, f))
        out.append(
            FieldDescriptor(
                name=f.name,
                owner=_declaring_class(cls, f.name),
                is_content=has_marker(metadata, MarkdownContent),
                ignored=has_marker(metadata, MarkdownContentIgnore),
            )
        )
    return out


def describe_fields(cls: type) -> List[FieldDescriptor]:
    """Return every writable field of a declarative model type.

    Ignored fields are included with `ignored=True`; callers filter them.
    Types that are neither pydantic models nor dataclasses yield [].
    """
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return _describe_pydantic(cls)
    if dataclasses.is_dataclass(cls) and isinstance(cls, type):
        return _describe_dataclass(cls)
    return []


class PropertyDescriptorCache:
    """Registry of dispatch plans keyed by runtime type.

    Create one per process (or per handler) at startup. Schemas for plain
    classes must be registered before the first traversal touches them.
    """

    def __init__(self) -> None:
        self._plans: Dict[type, TypeDispatchPlan] = {}
        self._schemas: Dict[type, Tuple[FieldDescriptor, ...]] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        fields: Sequence[str],
        *,
        content: Iterable[str] = (),
        ignore: Iterable[str] = (),
    ) -> None:
        """Declare the traversable fields of a type without a declarative schema.

        Args:
            cls: The plain class to describe
            fields: Attribute names in visiting order
            content: Subset of `fields` holding markdown content
            ignore: Subset of `fields` to exclude from handling

        Raises:
            ValueError: When names are not in `fields` or a plan was already built
        """
        content_set = set(content)
        ignore_set = set(ignore)
        unknown = (content_set | ignore_set) - set(fields)
        if unknown:
            raise ValueError(f"Unknown fields for {cls.__qualname__}: {sorted(unknown)}")
        with self._lock:
            if cls in self._plans:
                raise ValueError(
                    f"Dispatch plan for {cls.__qualname__} already built; register schemas before use"
                )
            self._schemas[cls] = tuple(
                FieldDescriptor(
                    name=name,
                    owner=cls,
                    is_content=name in content_set,
                    ignored=name in ignore_set,
                )
                for name in fields
            )

    def fields_of(self, cls: type) -> Tuple[FieldDescriptor, ...]:
        return self.plan_for(cls).fields

    def plan_for(self, cls: type) -> TypeDispatchPlan:
        plan = self._plans.get(cls)
        if plan is not None:
            return plan
        built = self._build(cls)
        with self._lock:
            return self._plans.setdefault(cls, built)

    def _build(self, cls: type) -> TypeDispatchPlan:
        schema: Optional[Sequence[FieldDescriptor]] = self._schemas.get(cls)
        described = list(schema) if schema is not None else describe_fields(cls)
        plan = TypeDispatchPlan(
            type=cls, fields=tuple(d for d in described if not d.ignored)
        )
        logger.debug(
            "Built dispatch plan for %s.%s: %d field(s), %d content",
            cls.__module__,
            cls.__qualname__,
            len(plan.fields),
            len(plan.content_fields),
        )
        return plan

    def __contains__(self, cls: Any) -> bool:
        return cls in self._plans

    def __len__(self) -> int:
        return len(self._plans)
