"""Tests for single-value rendering, placeholders and link merging."""
from __future__ import annotations

import pytest

from docmodel_markup.errors import UnsupportedContentTypeError
from docmodel_markup.handlers.content_transformer import (
    CONTENT_PLACEHOLDER,
    is_placeholder_content,
    markup,
)
from docmodel_markup.handlers.handle_context import HandleModelAttributesContext
from docmodel_markup.models.markup import DocumentType, FileAndType, LinkSourceInfo

from sample_models import FakeHost

FILE = FileAndType(base_dir="docs", file="api/page.yml", type=DocumentType.API_REFERENCE)


def _ctx(host=None, **kw) -> HandleModelAttributesContext:
    return HandleModelAttributesContext(host=host or FakeHost(), file_and_type=FILE, **kw)


def test_empty_and_none_short_circuit():
    ctx = _ctx()
    assert markup(None, ctx) is None
    assert markup("", ctx) == ""
    assert ctx.host.calls == []


def test_renders_through_host_with_file_identity():
    ctx = _ctx()
    assert markup("**bold**", ctx) == "<p><strong>bold</strong></p>"
    assert ctx.host.calls == [("**bold**", FILE)]


def test_placeholder_replaced_without_host_call():
    ctx = _ctx(enable_content_placeholder=True, placeholder_content="<p>original</p>")
    assert markup(f"  {CONTENT_PLACEHOLDER}\n", ctx) == "<p>original</p>"
    assert ctx.contains_placeholder is True
    assert ctx.host.calls == []


def test_placeholder_rendered_when_mode_disabled():
    ctx = _ctx(placeholder_content="ignored")
    assert markup(CONTENT_PLACEHOLDER, ctx) == "<p>*content</p>"
    assert ctx.contains_placeholder is False
    assert len(ctx.host.calls) == 1


def test_is_placeholder_content():
    assert is_placeholder_content("*content")
    assert is_placeholder_content("\t*content  ")
    assert not is_placeholder_content("*content*")
    assert not is_placeholder_content(None)
    assert not is_placeholder_content(42)


def test_non_string_rejected_with_type_name():
    ctx = _ctx()
    with pytest.raises(UnsupportedContentTypeError) as exc:
        markup(["a"], ctx, field_name="Page.summary")
    assert "builtins.list" in str(exc.value)
    assert "Page.summary" in str(exc.value)
    assert isinstance(exc.value, TypeError)
    assert ctx.host.calls == []


def test_links_unioned_and_sources_appended():
    ctx = _ctx()
    markup("see @System.String and [guide](guide.md)", ctx)
    markup("again @System.String and @System.Int32", ctx)
    assert ctx.link_to_uids == {"System.String", "System.Int32"}
    assert ctx.link_to_files == {"guide.md"}
    sources = ctx.uid_link_sources["System.String"]
    assert [s.line_number for s in sources] == [1, 2]
    assert all(isinstance(s, LinkSourceInfo) for s in sources)
    assert [s.source_file for s in ctx.file_link_sources["guide.md"]] == ["api/page.yml"]


def test_host_errors_propagate_unmodified():
    class Boom:
        def markup(self, content, file_and_type):
            raise RuntimeError("engine failed")

    ctx = _ctx(host=Boom())
    with pytest.raises(RuntimeError, match="engine failed"):
        markup("text", ctx)
