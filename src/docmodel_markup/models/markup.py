"""Pydantic models describing the boundary with the external markup engine.

The markup engine (the "host") is not part of this package. These models pin
down what the handlers hand to it (`FileAndType`) and what they expect back
(`MarkupResult`), so any engine can be plugged in through the `MarkupHost`
protocol.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Protocol, Set, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DocumentType",
    "FileAndType",
    "LinkSourceInfo",
    "MarkupResult",
    "MarkupHost",
]


class DocumentType(str, Enum):
    """Kind of source file a document model was built from."""

    ARTICLE = "article"
    API_REFERENCE = "api_reference"
    RESOURCE = "resource"
    TOC = "toc"
    OVERWRITE = "overwrite"


class FileAndType(BaseModel):
    """Identity of the file whose model is being handled."""

    model_config = ConfigDict(frozen=True)

    base_dir: str
    file: str
    type: DocumentType = DocumentType.ARTICLE


class LinkSourceInfo(BaseModel):
    """A place in a source file that links to a uid or another file."""

    model_config = ConfigDict(frozen=True)

    target: str
    anchor: Optional[str] = None
    source_file: Optional[str] = None
    line_number: int = 0


class MarkupResult(BaseModel):
    """Output of one markup engine call.

    `uid_link_sources` and `file_link_sources` map a link target (uid or file
    path) to the locations that reference it, in encounter order.
    """

    html: str
    link_to_uids: Set[str] = Field(default_factory=set)
    link_to_files: Set[str] = Field(default_factory=set)
    uid_link_sources: Dict[str, List[LinkSourceInfo]] = Field(default_factory=dict)
    file_link_sources: Dict[str, List[LinkSourceInfo]] = Field(default_factory=dict)


@runtime_checkable
class MarkupHost(Protocol):
    """Anything able to render markdown for a given file.

    Implementations must not touch the handler context; everything they
    discover is returned in the `MarkupResult`. Asynchronous engines must be
    wrapped so that `markup` returns only once rendering has completed.
    """

    def markup(self, content: str, file_and_type: FileAndType) -> MarkupResult:
        ...
