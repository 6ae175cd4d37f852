# sitemap_scout/crawler/fetcher.py
"""
Fetcher module: single HTTP GET with rate limiting, rotating User-Agent and timeout.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.config import DEFAULT_USER_AGENTS
from sitemap_scout.crawler.models import FetchResponse
from sitemap_scout.crawler.rate_limiter import RateLimiter
from sitemap_scout.errors import FetchError, FetchTimeout
from sitemap_scout.logger import logger


class Fetcher:
    """Issues GET requests through a shared :class:`RateLimiter`.

    Status codes are returned as data; only transport problems raise
    :class:`FetchError`. Use as an async context manager to own the
    session, or pass an existing ``session``.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        timeout: float = 30.0,
        user_agents: Sequence[str] = DEFAULT_USER_AGENTS,
        session: Optional[ClientSession] = None,
    ) -> None:
        if not user_agents:
            raise ValueError("user_agents must not be empty")
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.user_agents = tuple(user_agents)
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def pick_user_agent(self) -> str:
        return random.choice(self.user_agents)

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch *url* once. Consumes one rate-limiter slot per call.

        Raises FetchTimeout when the request exceeds the timeout and
        FetchError on any other transport failure.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        await self.rate_limiter.acquire()
        headers = {"User-Agent": self.pick_user_agent()}
        try:
            async with self.session.get(
                url,
                headers=headers,
                timeout=ClientTimeout(total=self.timeout),
                allow_redirects=True,
            ) as resp:
                body = await resp.read()
                logger.debug("GET %s -> HTTP %s (%d bytes)", url, resp.status, len(body))
                return FetchResponse(
                    url=url,
                    final_url=str(resp.url),
                    status=resp.status,
                    body=body,
                )
        except asyncio.TimeoutError as exc:
            raise FetchTimeout(url, exc) from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, exc) from exc
