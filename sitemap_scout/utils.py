# File: sitemap_scout/utils.py
"""sitemap_scout.utils: Нормализация URL и предварительные проверки сети перед обходом."""

from __future__ import annotations

import asyncio
from typing import Sequence
from urllib.parse import urlparse, urlunparse

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.errors import ConnectivityError, InvalidSeedURL
from sitemap_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "check_connection",
    "validate_seed_url",
)


def normalize_url(url: str) -> str:
    """Ключ для множества посещённых URL: без пробелов и фрагмента, схема и хост в нижнем регистре."""
    parsed = urlparse(url.strip())
    return urlunparse(
        (parsed.scheme.lower(), parsed.netloc.lower(), parsed.path, parsed.params, parsed.query, "")
    )


async def check_connection(host: str = "google.com", port: int = 80, timeout: float = 5.0) -> None:
    """Проверяет доступ в сеть TCP-соединением с host:port, иначе ConnectivityError."""
    logger.info("Checking internet connection (%s:%d)...", host, port)
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout=timeout)
    except (OSError, asyncio.TimeoutError) as exc:
        raise ConnectivityError(f"no internet connection: {str(exc) or type(exc).__name__}") from exc
    writer.close()
    try:
        await writer.wait_closed()
    except OSError as exc:  # pragma: no cover
        logger.debug("Error closing connectivity probe: %s", exc)


async def validate_seed_url(url: str, timeout: float = 30.0) -> None:
    """Отклоняет пустой URL и URL, к которому невозможно выполнить запрос.

    HTTP-статус не проверяется: важна только достижимость.
    """
    if not url or not url.strip():
        raise InvalidSeedURL("URL is empty")
    logger.info("Validating URL %s...", url)
    try:
        async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
            async with session.get(url) as resp:
                logger.debug("Seed %s answered HTTP %s", url, resp.status)
    except asyncio.TimeoutError as exc:
        raise InvalidSeedURL(f"invalid URL: {url}: timeout") from exc
    except (ClientError, ValueError) as exc:
        raise InvalidSeedURL(f"invalid URL: {url}: {exc}") from exc
