# sitemap_scout/crawler/pool.py
"""
Bounded-concurrency scraping of leaf page URLs.
"""
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import PageResult
from sitemap_scout.errors import FetchError, ParseError
from sitemap_scout.logger import logger
from sitemap_scout.parser.html_parser import Parser, StatusParser


class ResultCollector:
    """Lock-guarded accumulator of :class:`PageResult` for one scrape run."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._results: List[PageResult] = []

    async def add(self, result: PageResult) -> None:
        async with self._lock:
            self._results.append(result)

    async def snapshot(self) -> List[PageResult]:
        async with self._lock:
            return list(self._results)


class ScrapePool:
    """Fetches every URL once, never more than ``concurrency`` at a time.

    Failed fetches are logged and dropped, so the result may be shorter
    than the input. Results come back in completion order.
    """

    def __init__(self, fetcher: Fetcher, concurrency: int = 10, parser: Optional[Parser] = None) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.fetcher = fetcher
        self.concurrency = concurrency
        self.parser: Parser = parser if parser is not None else StatusParser()

    async def scrape_all(self, urls: Sequence[str]) -> List[PageResult]:
        logger.info("Scraping %d URLs (concurrency=%d)", len(urls), self.concurrency)
        start = time.monotonic()
        gate = asyncio.Semaphore(self.concurrency)
        collector = ResultCollector()

        await asyncio.gather(*(self._scrape_one(url, gate, collector) for url in urls))

        results = await collector.snapshot()
        logger.info(
            "Scraped %d of %d URLs in %.2f s", len(results), len(urls), time.monotonic() - start
        )
        return results

    async def _scrape_one(self, url: str, gate: asyncio.Semaphore, collector: ResultCollector) -> None:
        logger.debug("Requesting URL: %s", url)
        async with gate:
            try:
                response = await self.fetcher.fetch(url)
            except FetchError as exc:
                logger.warning("Error requesting URL: %s, Error: %s", url, exc)
                return

        try:
            meta = self.parser.extract(response)
        except ParseError as exc:
            logger.warning("Error parsing URL: %s, Error: %s", url, exc)
            return
        await collector.add(PageResult.from_metadata(meta))
