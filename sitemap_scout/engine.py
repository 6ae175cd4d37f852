# File: sitemap_scout/engine.py
"""sitemap_scout.engine: Оркестрация: обход sitemap, затем загрузка найденных страниц."""

from __future__ import annotations

from typing import List, Optional

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import PageResult
from sitemap_scout.crawler.pool import ScrapePool
from sitemap_scout.crawler.rate_limiter import RateLimiter
from sitemap_scout.crawler.walker import SitemapWalker
from sitemap_scout.logger import logger
from sitemap_scout.parser.html_parser import Parser, get_parser

__all__ = ["crawl_site", "scrape_with_fetcher"]


async def scrape_with_fetcher(
    config: CrawlerConfig, fetcher: Fetcher, parser: Optional[Parser] = None
) -> List[PageResult]:
    """Walker, затем Pool, на уже открытом Fetcher."""
    walker = SitemapWalker(fetcher, max_depth=config.max_depth, walk_timeout=config.walk_timeout)
    urls = await walker.walk(str(config.seed_url))
    logger.info("Extracted %d URLs from sitemap", len(urls))
    if not urls:
        logger.info("No URLs extracted from sitemap")
        return []

    pool = ScrapePool(
        fetcher,
        concurrency=config.concurrency,
        parser=parser if parser is not None else get_parser(config.extract_metadata),
    )
    return await pool.scrape_all(urls)


async def crawl_site(config: CrawlerConfig, parser: Optional[Parser] = None) -> List[PageResult]:
    """
    Запускает полный обход по конфигурации и возвращает список PageResult.

    Один RateLimiter на весь запуск: walker и pool делят общий лимит запросов.
    """
    rate_limiter = RateLimiter(config.rate_interval)
    async with Fetcher(rate_limiter, timeout=config.timeout, user_agents=config.user_agents) as fetcher:
        return await scrape_with_fetcher(config, fetcher, parser)
