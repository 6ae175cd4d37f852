# File: sitemap_scout/errors.py
"""sitemap_scout.errors: Иерархия исключений краулера.

Per-URL failures (:class:`FetchError`, :class:`ParseError`) are contained by
the walker and the scrape pool; only the preflight errors reach the CLI.
"""

from __future__ import annotations

from typing import Optional

__all__ = (
    "CrawlerError",
    "FetchError",
    "FetchTimeout",
    "ParseError",
    "ConnectivityError",
    "InvalidSeedURL",
)


class CrawlerError(Exception):
    """Base class for every error raised by SitemapScout."""


class FetchError(CrawlerError):
    """Transport-level failure of a single GET request."""

    reason = "transport error"

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None and str(cause) else ""
        super().__init__(f"{self.reason} for {url}{detail}")


class FetchTimeout(FetchError):
    """The request did not complete within the configured timeout."""

    reason = "timeout"


class ParseError(CrawlerError):
    """A sitemap or HTML body could not be parsed."""


class ConnectivityError(CrawlerError):
    """Outbound network is not reachable."""


class InvalidSeedURL(CrawlerError, ValueError):
    """Seed URL is empty or cannot be requested."""
