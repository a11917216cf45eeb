"""Sliding-window request rate limiter."""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Allows at most max_requests acquisitions per window seconds."""

    def __init__(
        self,
        max_requests: int,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self._max_requests = max_requests
        self._window = window
        self._clock = clock
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        cutoff = now - self._window
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    @property
    def current_requests(self) -> int:
        """Requests recorded in the current window."""
        self._evict(self._clock())
        return len(self._timestamps)

    def wait_time(self) -> float:
        """Seconds until a slot frees up, 0 when one is free now."""
        now = self._clock()
        self._evict(now)
        if len(self._timestamps) < self._max_requests:
            return 0.0
        return max(0.0, self._timestamps[0] + self._window - now)

    async def acquire(self) -> None:
        """Wait for a free slot in the window and record the request."""
        async with self._lock:
            delay = self.wait_time()
            while delay > 0:
                logger.info("Rate limit reached, waiting %.1fs", delay)
                await asyncio.sleep(delay)
                delay = self.wait_time()
            self._timestamps.append(self._clock())
