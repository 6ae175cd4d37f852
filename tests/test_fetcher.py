# File: tests/test_fetcher.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from conftest import serve_app
from sitemap_scout.config import DEFAULT_USER_AGENTS
from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.rate_limiter import RateLimiter
from sitemap_scout.errors import FetchError, FetchTimeout


class CountingLimiter(RateLimiter):
    def __init__(self) -> None:
        super().__init__(0.001)
        self.acquired = 0

    async def acquire(self) -> None:
        self.acquired += 1
        await super().acquire()


@pytest_asyncio.fixture
async def server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()
    seen_agents: list[str] = []

    async def ok(request):
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(text="<h1>ok</h1>", content_type="text/html")

    async def missing(_):
        return web.Response(status=404, text="nope")

    async def broken(_):
        return web.Response(status=500, text="boom")

    async def slow(_):
        await asyncio.sleep(2)
        return web.Response(text="late")

    async def moved(_):
        raise web.HTTPFound("/ok")

    app.router.add_get("/ok", ok)
    app.router.add_get("/missing", missing)
    app.router.add_get("/broken", broken)
    app.router.add_get("/slow", slow)
    app.router.add_get("/moved", moved)

    async for url in serve_app(app, unused_tcp_port):
        yield url, seen_agents


@pytest.mark.asyncio()
async def test_fetch_returns_body_and_status(server):
    base, _ = server
    limiter = CountingLimiter()
    async with Fetcher(limiter, timeout=5.0) as fetcher:
        resp = await fetcher.fetch(f"{base}/ok")

    assert resp.status == 200
    assert resp.body == b"<h1>ok</h1>"
    assert resp.url == f"{base}/ok"
    assert limiter.acquired == 1


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/missing", 404), ("/broken", 500), ("/nowhere", 404)])
async def test_non_2xx_is_data(server, path, status):
    base, _ = server
    async with Fetcher(CountingLimiter(), timeout=5.0) as fetcher:
        resp = await fetcher.fetch(f"{base}{path}")
    assert resp.status == status


@pytest.mark.asyncio()
async def test_redirect_reports_final_url(server):
    base, _ = server
    async with Fetcher(CountingLimiter(), timeout=5.0) as fetcher:
        resp = await fetcher.fetch(f"{base}/moved")
    assert resp.status == 200
    assert resp.url == f"{base}/moved"
    assert resp.final_url == f"{base}/ok"


@pytest.mark.asyncio()
async def test_timeout_raises_fetch_timeout(server):
    base, _ = server
    async with Fetcher(CountingLimiter(), timeout=0.3) as fetcher:
        with pytest.raises(FetchTimeout) as info:
            await fetcher.fetch(f"{base}/slow")
    assert isinstance(info.value, FetchError)
    assert info.value.url == f"{base}/slow"


@pytest.mark.asyncio()
async def test_connection_refused_raises_fetch_error(unused_tcp_port: int):
    async with Fetcher(CountingLimiter(), timeout=2.0) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch(f"http://localhost:{unused_tcp_port}/")


@pytest.mark.asyncio()
async def test_invalid_url_raises_fetch_error():
    async with Fetcher(CountingLimiter(), timeout=2.0) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch("not a url")


@pytest.mark.asyncio()
async def test_user_agent_comes_from_pool(server, monkeypatch):
    base, seen_agents = server
    agents = ["AgentA/1.0", "AgentB/2.0"]
    picks = iter([agents[1], agents[0], agents[1]])
    monkeypatch.setattr("sitemap_scout.crawler.fetcher.random.choice", lambda seq: next(picks))

    async with Fetcher(CountingLimiter(), timeout=5.0, user_agents=agents) as fetcher:
        for _ in range(3):
            await fetcher.fetch(f"{base}/ok")

    assert seen_agents == ["AgentB/2.0", "AgentA/1.0", "AgentB/2.0"]


def test_default_pool_is_used_and_not_empty():
    fetcher = Fetcher(RateLimiter(0.1))
    assert fetcher.user_agents == tuple(DEFAULT_USER_AGENTS)
    assert fetcher.pick_user_agent() in DEFAULT_USER_AGENTS
    with pytest.raises(ValueError):
        Fetcher(RateLimiter(0.1), user_agents=[])


@pytest.mark.asyncio()
async def test_fetch_without_session_fails():
    with pytest.raises(RuntimeError):
        await Fetcher(RateLimiter(0.1)).fetch("http://example.com")
