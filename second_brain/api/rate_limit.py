"""
Fixed-window request rate limiting.

Counts requests per caller key in fixed windows and rejects the excess with
RateLimitExceeded (HTTP 429 with Retry-After).

Dependencies: time
System role: Local protection of provider-backed endpoints
"""

import math
import time
from typing import Callable

from second_brain.core.exceptions import RateLimitExceeded

_PRUNE_THRESHOLD = 10_000


class FixedWindowRateLimiter:
    """Per-key fixed-window counter."""

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> None:
        """
        Count one request for key.

        Raises:
            RateLimitExceeded: The key's budget for the current window is spent
        """
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0

        if count >= self.max_requests:
            retry_after = max(1, math.ceil(start + self.window_seconds - now))
            raise RateLimitExceeded(retry_after=retry_after, details={"limit": self.max_requests})

        self._windows[key] = (start, count + 1)
        if len(self._windows) > _PRUNE_THRESHOLD:
            self._prune(now)

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]
