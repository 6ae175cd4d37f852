# sitemap_scout/crawler/rate_limiter.py
"""
Global request gate: one admission per fixed interval, shared by every caller.
"""
from __future__ import annotations

import asyncio
import math
import time
from typing import Callable


class RateLimiter:
    """Admits callers on a fixed time grid ``origin + k * interval``.

    There is no burst allowance: a tick nobody claimed is lost, and each
    :meth:`acquire` reserves the earliest free tick that is not in the past.
    Slot reservation happens without suspending, so concurrent tasks on the
    same loop never receive the same tick.
    """

    def __init__(self, interval: float = 0.1, clock: Callable[[], float] = time.monotonic) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.interval = interval
        self._clock = clock
        self._origin = clock()
        self._next_slot = self._origin

    def _reserve(self) -> float:
        now = self._clock()
        earliest = max(now, self._next_slot)
        # rounding keeps float drift from skipping a tick
        ticks = math.ceil(round((earliest - self._origin) / self.interval, 9))
        slot = self._origin + ticks * self.interval
        self._next_slot = slot + self.interval
        return slot - now

    async def acquire(self) -> None:
        """Suspend until the next admission instant."""
        wait = self._reserve()
        if wait > 0:
            await asyncio.sleep(wait)
