# === FILE: sitemap_scout/parser/html_parser.py ===
"""Page metadata extraction for SitemapScout.

The scrape pool does not know how much of a page it should read; it receives
a :class:`Parser` and calls :meth:`Parser.extract` on every fetched response.
Two implementations ship with the project:

* :class:`StatusParser`: records only URL and HTTP status (the default).
* :class:`SeoParser`: additionally pulls the first ``<title>``, the first
  ``<h1>`` and the ``content`` of the first ``<meta name="description…">``.

Anything with a matching ``extract`` method can be injected instead, no
subclassing required.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup

from sitemap_scout.crawler.models import FetchResponse, PageMetadata

__all__: Sequence[str] = ("Parser", "StatusParser", "SeoParser", "get_parser")


@runtime_checkable
class Parser(Protocol):
    """Turns one raw response into :class:`PageMetadata`."""

    def extract(self, response: FetchResponse) -> PageMetadata: ...


class StatusParser:
    """Status capture only; the body is never parsed."""

    def extract(self, response: FetchResponse) -> PageMetadata:
        return PageMetadata(url=response.url, status_code=response.status)


class SeoParser:
    """Title / H1 / meta description extraction with BeautifulSoup."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def extract(self, response: FetchResponse) -> PageMetadata:
        soup = BeautifulSoup(response.body, self.features)

        title_tag = soup.find("title")
        h1_tag = soup.find("h1")
        meta_tag = soup.select_one('meta[name^="description"]')
        description = meta_tag.get("content", "") if meta_tag else ""

        return PageMetadata(
            url=response.final_url or response.url,
            status_code=response.status,
            title=title_tag.get_text(" ", strip=True) if title_tag else "",
            h1=h1_tag.get_text(" ", strip=True) if h1_tag else "",
            meta_description=str(description).strip(),
        )


def get_parser(extract_metadata: bool) -> Parser:
    """Pick the parser matching the ``extract_metadata`` config flag."""
    return SeoParser() if extract_metadata else StatusParser()
