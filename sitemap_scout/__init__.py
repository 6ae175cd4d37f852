"""
SitemapScout package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from sitemap_scout.engine import crawl_site  # noqa: E402

__all__ = ["__version__", "crawl_site"]
