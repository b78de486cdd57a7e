"""Tests for dispatch plan discovery and caching.

Plans list writable, non-ignored fields in declaration order and depend only
on the class, never on instance values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, List, Optional

import pytest

from docmodel_markup.handlers.property_cache import (
    PropertyDescriptorCache,
    TypeDispatchPlan,
    describe_fields,
)
from docmodel_markup.models.annotations import MarkdownContent, MarkdownContentIgnore, has_marker

from sample_models import (
    ConceptualPage,
    DataclassItem,
    Empty,
    FrozenItem,
    FrozenPage,
    PageModel,
    PartlyFrozen,
    PlainItem,
    UnionMarked,
    UnionMarkedItem,
    Untouched,
)


def _names(plan: TypeDispatchPlan) -> list[str]:
    return [f.name for f in plan.fields]


def test_pydantic_plan_order_and_exclusions():
    cache = PropertyDescriptorCache()
    plan = cache.plan_for(PageModel)
    assert _names(plan) == [
        "uid",
        "title",
        "summary",
        "remarks",
        "syntax",
        "parameters",
        "sections",
        "tags",
        "metadata",
    ]
    assert [f.name for f in plan.content_fields] == ["summary", "remarks"]
    # MarkdownContentIgnore fields are dropped entirely
    assert "raw" not in _names(plan)
    assert "hidden" not in _names(plan)


def test_inherited_fields_keep_owner_and_base_first_order():
    cache = PropertyDescriptorCache()
    fields = cache.fields_of(ConceptualPage)
    names = [f.name for f in fields]
    assert names[0] == "uid"
    assert names[-1] == "conceptual"
    owners = {f.name: f.owner for f in fields}
    assert owners["summary"] is PageModel
    assert owners["conceptual"] is ConceptualPage


def test_frozen_models_have_no_writable_fields():
    cache = PropertyDescriptorCache()
    assert cache.fields_of(FrozenPage) == ()
    assert cache.fields_of(FrozenItem) == ()
    assert [f.name for f in cache.fields_of(PartlyFrozen)] == ["summary"]


def test_dataclass_plan_uses_annotated_markers():
    fields = describe_fields(DataclassItem)
    by_name = {f.name: f for f in fields}
    assert by_name["summary"].is_content
    assert not by_name["name"].is_content
    assert by_name["notes"].ignored
    cache = PropertyDescriptorCache()
    assert [f.name for f in cache.fields_of(DataclassItem)] == ["name", "summary", "children"]


def test_types_without_fields_get_empty_plan():
    cache = PropertyDescriptorCache()
    assert cache.fields_of(Empty) == ()
    assert cache.fields_of(Untouched) == ()
    assert cache.fields_of(dict) == ()
    assert len(cache.plan_for(Empty)) == 0


def test_plan_is_built_once_and_reused():
    cache = PropertyDescriptorCache()
    first = cache.plan_for(PageModel)
    second = cache.plan_for(PageModel)
    assert first is second
    assert PageModel in cache
    assert len(cache) == 1


def test_plan_does_not_depend_on_instance_values():
    cache_a = PropertyDescriptorCache()
    cache_b = PropertyDescriptorCache()
    PageModel(uid="a", summary="x")
    assert cache_a.plan_for(PageModel) == cache_b.plan_for(PageModel)


def test_registered_schema_for_plain_class():
    cache = PropertyDescriptorCache()
    cache.register(PlainItem, ["name", "summary", "extra"], content=["summary"], ignore=["extra"])
    plan = cache.plan_for(PlainItem)
    assert _names(plan) == ["name", "summary"]
    assert [f.name for f in plan.content_fields] == ["summary"]
    assert plan.fields[0].owner is PlainItem


def test_register_rejects_unknown_names_and_late_registration():
    cache = PropertyDescriptorCache()
    with pytest.raises(ValueError, match="Unknown fields"):
        cache.register(PlainItem, ["name"], content=["summary"])
    cache.plan_for(PlainItem)
    with pytest.raises(ValueError, match="already built"):
        cache.register(PlainItem, ["summary"], content=["summary"])


def test_has_marker_accepts_class_or_instance():
    assert has_marker([MarkdownContent], MarkdownContent)
    assert has_marker([object(), MarkdownContent()], MarkdownContent)
    assert not has_marker([MarkdownContentIgnore()], MarkdownContent)
    assert not has_marker([], MarkdownContent)


def test_marker_inside_optional_union():
    cache = PropertyDescriptorCache()
    assert [f.name for f in cache.plan_for(UnionMarked).content_fields] == ["summary", "remarks"]
    plan = cache.plan_for(UnionMarkedItem)
    assert [f.name for f in plan.fields] == ["summary"]
    assert plan.fields[0].is_content


def test_local_dataclass_with_forward_references():
    @dataclass
    class Node:
        summary: Annotated[Optional[str], MarkdownContent()] = None
        kids: List[Node] = field(default_factory=list)
        other: Optional[NotDefinedAnywhere] = None  # noqa: F821

    fields = PropertyDescriptorCache().fields_of(Node)
    assert [f.name for f in fields] == ["summary", "kids", "other"]
    assert [f.name for f in fields if f.is_content] == ["summary"]
