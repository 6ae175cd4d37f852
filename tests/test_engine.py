# File: tests/test_engine.py
# End-to-end: sitemap index -> leaf sitemaps -> pages, against a local aiohttp server.
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from conftest import serve_app, sitemapindex, urlset
from sitemap_scout.config import CrawlerConfig
from sitemap_scout.engine import crawl_site
from sitemap_scout.parser.html_parser import SeoParser

PAGES_PER_SITEMAP = 3


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()
    base = f"http://localhost:{unused_tcp_port}"
    leaf_a = [f"{base}/a/{i}" for i in range(PAGES_PER_SITEMAP)]
    leaf_b = [f"{base}/b/{i}" for i in range(PAGES_PER_SITEMAP)]

    def xml(body: str):
        async def handler(_):
            return web.Response(text=body, content_type="application/xml")

        return handler

    async def page(request):
        name = request.match_info["name"]
        return web.Response(
            text=f"<html><head><title>Page {name}</title></head><body><h1>H {name}</h1></body></html>",
            content_type="text/html",
        )

    app.router.add_get("/sitemap_index.xml", xml(sitemapindex(f"{base}/sitemap-a.xml", f"{base}/sitemap-b.xml")))
    app.router.add_get("/sitemap-a.xml", xml(urlset(*leaf_a)))
    app.router.add_get("/sitemap-b.xml", xml(urlset(*leaf_b)))
    app.router.add_get("/empty.xml", xml("<urlset></urlset>"))
    app.router.add_get("/a/{name}", page)
    app.router.add_get("/b/{name}", page)

    async for url in serve_app(app, unused_tcp_port):
        yield url


def make_config(seed: str, **kwargs) -> CrawlerConfig:
    return CrawlerConfig(seed_url=seed, rate_interval=0.005, timeout=5.0, walk_timeout=10.0, **kwargs)


@pytest.mark.asyncio()
async def test_index_with_two_sitemaps_yields_six_results(site: str):
    results = await crawl_site(make_config(f"{site}/sitemap_index.xml"))

    expected = [f"{site}/{d}/{i}" for d in ("a", "b") for i in range(PAGES_PER_SITEMAP)]
    assert len(results) == 6
    assert sorted(r.url for r in results) == sorted(expected)
    assert all(r.status_code == 200 for r in results)
    assert all(r.title == "" for r in results)


@pytest.mark.asyncio()
async def test_metadata_extraction_flag(site: str):
    results = await crawl_site(make_config(f"{site}/sitemap-a.xml", extract_metadata=True))

    assert {r.title for r in results} == {f"Page {i}" for i in range(PAGES_PER_SITEMAP)}
    assert {r.h1 for r in results} == {f"H {i}" for i in range(PAGES_PER_SITEMAP)}


@pytest.mark.asyncio()
async def test_explicit_parser_overrides_config(site: str):
    results = await crawl_site(make_config(f"{site}/sitemap-b.xml"), parser=SeoParser())
    assert all(r.title.startswith("Page ") for r in results)


@pytest.mark.asyncio()
async def test_empty_sitemap_returns_no_results(site: str):
    assert await crawl_site(make_config(f"{site}/empty.xml")) == []


@pytest.mark.asyncio()
async def test_depth_zero_does_not_descend(site: str):
    results = await crawl_site(make_config(f"{site}/sitemap_index.xml", max_depth=0))
    assert results == []
