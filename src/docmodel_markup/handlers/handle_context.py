"""Request-scoped state threaded through one model traversal.

The context is created by the caller for each document, passed by reference
through every recursive `handle` call, and read back afterwards to collect
the link metadata gathered while rendering.

State Fields:
    host: Markup engine used to render content (required)
    file_and_type: Identity of the document being handled
    skip_markup: Bypass flag; when set `handle` returns its input untouched
    enable_content_placeholder: Allow the ``*content`` sentinel to be replaced
    placeholder_content: Replacement text for the sentinel
    contains_placeholder: Set once any sentinel was replaced
    link_to_uids / link_to_files: Union of link targets returned by the host
    uid_link_sources / file_link_sources: Target -> referencing locations

Only the content transformer mutates the context. Link sets and source maps
only grow; entries are appended, never replaced or removed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..models.markup import FileAndType, LinkSourceInfo, MarkupHost, MarkupResult

__all__ = ["HandleModelAttributesContext", "merge_link_sources"]


def merge_link_sources(
    target: Dict[str, List[LinkSourceInfo]],
    incoming: Mapping[str, Iterable[LinkSourceInfo]],
) -> None:
    """Append `incoming` source locations to `target`, grouped by key."""
    for key, sources in incoming.items():
        target.setdefault(key, []).extend(sources)


@dataclass
class HandleModelAttributesContext:
    host: Optional[MarkupHost]
    file_and_type: Optional[FileAndType] = None
    skip_markup: bool = False
    enable_content_placeholder: bool = False
    placeholder_content: Optional[str] = None
    contains_placeholder: bool = False
    link_to_uids: Set[str] = field(default_factory=set)
    link_to_files: Set[str] = field(default_factory=set)
    uid_link_sources: Dict[str, List[LinkSourceInfo]] = field(default_factory=dict)
    file_link_sources: Dict[str, List[LinkSourceInfo]] = field(default_factory=dict)

    def add_markup_result(self, result: MarkupResult) -> None:
        """Fold one host result into the accumulated link metadata."""
        self.link_to_uids.update(result.link_to_uids)
        self.link_to_files.update(result.link_to_files)
        merge_link_sources(self.uid_link_sources, result.uid_link_sources)
        merge_link_sources(self.file_link_sources, result.file_link_sources)
