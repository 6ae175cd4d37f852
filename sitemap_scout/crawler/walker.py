# === FILE: sitemap_scout/crawler/walker.py ===
"""Recursive sitemap-index expansion down to leaf page URLs."""
from __future__ import annotations

import asyncio
import time
from typing import Iterable, List, Set

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.errors import FetchError, ParseError
from sitemap_scout.logger import logger
from sitemap_scout.parser.sitemap_parser import classify_urls, parse_sitemap
from sitemap_scout.utils import normalize_url

__all__ = ("SitemapWalker", "WalkAggregator")


class WalkAggregator:
    """Visited set and page accumulator of a single walk, guarded by one lock.

    After :meth:`close` the aggregator refuses further writes, so visits that
    finish after the deadline cannot change the returned result.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._visited: Set[str] = set()
        self._pages: List[str] = []
        self._closed = False

    async def mark_visited(self, url: str) -> bool:
        """Return True if *url* was not seen before (and record it)."""
        key = normalize_url(url)
        async with self._lock:
            if self._closed or key in self._visited:
                return False
            self._visited.add(key)
            return True

    async def add_pages(self, urls: Iterable[str]) -> None:
        async with self._lock:
            if not self._closed:
                self._pages.extend(urls)

    async def close(self) -> List[str]:
        async with self._lock:
            self._closed = True
            return list(self._pages)

    @property
    def visited_count(self) -> int:
        return len(self._visited)


class SitemapWalker:
    """Depth-bounded, deduplicating walk over a tree of sitemap files."""

    def __init__(self, fetcher: Fetcher, max_depth: int = 10, walk_timeout: float = 600.0) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if walk_timeout <= 0:
            raise ValueError("walk_timeout must be > 0")
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.walk_timeout = walk_timeout

    async def walk(self, seed_url: str) -> List[str]:
        """Expand *seed_url* and return the page URLs found before the deadline."""
        logger.info("Обход sitemap: %s (max_depth=%d)", seed_url, self.max_depth)
        start = time.monotonic()
        aggregator = WalkAggregator()
        task = asyncio.ensure_future(self._visit(seed_url, 0, aggregator))

        done, _ = await asyncio.wait({task}, timeout=self.walk_timeout)
        pages = await aggregator.close()

        if task in done:
            if task.exception() is not None:
                logger.error("Unexpected error while walking %s: %s", seed_url, task.exception())
            logger.info(
                "Sitemap extraction completed: %d pages from %d sitemaps in %.2f s",
                len(pages), aggregator.visited_count, time.monotonic() - start,
            )
        else:
            logger.warning(
                "Sitemap extraction timed out after %.1f s, returning %d pages",
                self.walk_timeout, len(pages),
            )
            # the abandoned subtree is reaped here so none of its requests
            # outlive the Fetcher's session; the result is already fixed
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        return pages

    async def _visit(self, url: str, depth: int, aggregator: WalkAggregator) -> None:
        if depth > self.max_depth:
            logger.info("Max depth reached for URL: %s", url)
            return
        if not await aggregator.mark_visited(url):
            return

        logger.info("Processing URL (depth %d): %s", depth, url)
        try:
            response = await self.fetcher.fetch(url)
            urls = parse_sitemap(response.body)
        except FetchError as exc:
            logger.warning("Error retrieving URL: %s, Error: %s", url, exc)
            return
        except ParseError as exc:
            logger.warning("Error extracting URLs from %s: %s", url, exc)
            return

        sitemaps, pages = classify_urls(urls)
        for sitemap in sitemaps:
            logger.debug("Found sitemap %s", sitemap)
        await aggregator.add_pages(pages)

        if sitemaps:
            results = await asyncio.gather(
                *(self._visit(sitemap, depth + 1, aggregator) for sitemap in sitemaps),
                return_exceptions=True,
            )
            for sitemap, result in zip(sitemaps, results):
                if isinstance(result, Exception):
                    logger.error("Unexpected error while walking %s: %s", sitemap, result)
