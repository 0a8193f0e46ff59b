"""
Data models for the SiteHarvest crawler.

Content blocks form a tagged union: every block is either a :class:`Paragraph`
or a :class:`ListBlock`, and serializes to exactly one of ``{"paragraph": ...}``
or ``{"lists": [...]}``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

__all__ = (
    "FetchResponse",
    "Paragraph",
    "ListBlock",
    "ContentBlock",
    "Section",
    "Page",
    "ScrapedData",
)


@dataclass(slots=True, frozen=True)
class FetchResponse:
    """Raw transport result: HTTP status, undecoded body and the charset from ``Content-Type``."""

    status: int
    body: bytes
    encoding: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True, frozen=True)
class Paragraph:
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"paragraph": self.text}


@dataclass(slots=True, frozen=True)
class ListBlock:
    items: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"lists": list(self.items)}


ContentBlock = Union[Paragraph, ListBlock]


@dataclass(slots=True, frozen=True)
class Section:
    """Content grouped under one header; never built with an empty ``content``."""

    header: str
    content: Tuple[ContentBlock, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"header": self.header, "content": [block.to_dict() for block in self.content]}


@dataclass(slots=True, frozen=True)
class Page:
    """Structured content of one successfully scraped URL."""

    url: str
    title: str
    sections: Tuple[Section, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass(slots=True)
class ScrapedData:
    """Result of one crawl run: pages in the order they were scraped."""

    pages: List[Page] = field(default_factory=list)

    def add(self, page: Page) -> None:
        self.pages.append(page)

    def __len__(self) -> int:
        return len(self.pages)

    def to_dict(self) -> Dict[str, Any]:
        return {"pages": [page.to_dict() for page in self.pages]}
