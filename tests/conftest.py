# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import AsyncIterator
from typing import Dict, Iterable, List, Optional, Set

import pytest
from aiohttp import web

from sitemap_scout.crawler.models import FetchResponse
from sitemap_scout.errors import FetchError


def urlset(*locs: str) -> str:
    """Build a <urlset> sitemap body listing *locs*."""
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'
    )


def sitemapindex(*locs: str) -> str:
    """Build a <sitemapindex> body listing *locs*."""
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
    )


class FakeFetcher:
    """In-memory stand-in for Fetcher.

    ``pages`` maps URL -> body; URLs in ``failing`` raise FetchError, unknown
    URLs answer 404. Every call is counted and the number of concurrent
    fetches is tracked.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        failing: Iterable[str] = (),
        delay: float = 0.0,
        slow: Optional[Dict[str, float]] = None,
    ) -> None:
        self.pages = pages or {}
        self.failing: Set[str] = set(failing)
        self.delay = delay
        self.slow = slow or {}
        self.calls: Counter[str] = Counter()
        self.order: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> FetchResponse:
        self.calls[url] += 1
        self.order.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.slow.get(url, self.delay))
            if url in self.failing:
                raise FetchError(url, ConnectionRefusedError("connection refused"))
            if url not in self.pages:
                return FetchResponse(url=url, final_url=url, status=404, body=b"")
            return FetchResponse(url=url, final_url=url, status=200, body=self.pages[url].encode("utf-8"))
        finally:
            self.in_flight -= 1


@pytest.fixture()
def fake_fetcher_factory():
    return FakeFetcher


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
