# sitemap_scout/crawler/models.py
"""
Data models for the SitemapScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Raw outcome of one GET: requested URL, final URL after redirects, status and body."""

    url: str
    final_url: str
    status: int
    body: bytes


@dataclass(frozen=True, slots=True)
class PageMetadata:
    """What a parser extracted from one response."""

    url: str
    status_code: int
    title: str = ""
    h1: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class PageResult:
    """Final record for one successfully fetched page."""

    url: str
    status_code: int
    title: str = ""
    h1: str = ""
    meta_description: str = ""

    @classmethod
    def from_metadata(cls, meta: PageMetadata) -> PageResult:
        return cls(
            url=meta.url,
            status_code=meta.status_code,
            title=meta.title,
            h1=meta.h1,
            meta_description=meta.meta_description,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
