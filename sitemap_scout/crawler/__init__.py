# File: sitemap_scout/crawler/__init__.py
"""sitemap_scout.crawler: Ограничитель запросов, загрузчик, обход sitemap и пул загрузки страниц."""

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import FetchResponse, PageMetadata, PageResult
from sitemap_scout.crawler.pool import ScrapePool
from sitemap_scout.crawler.rate_limiter import RateLimiter
from sitemap_scout.crawler.walker import SitemapWalker

__all__ = [
    "FetchResponse",
    "Fetcher",
    "PageMetadata",
    "PageResult",
    "RateLimiter",
    "ScrapePool",
    "SitemapWalker",
]
