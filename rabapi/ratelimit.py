"""Fixed-window request limiter keyed by client address."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Allow at most ``max_requests`` per ``window`` seconds for each key.

    Windows start at a key's first request; expired windows are dropped
    lazily when the key is seen again or during :meth:`prune`, which runs at
    most once per window once more than ``max_keys`` keys are tracked.
    """

    def __init__(
        self,
        max_requests: int = 60,
        window: float = 60.0,
        max_keys: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self.max_keys = max_keys
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for *key* and report whether it is allowed."""
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window:
            start, count = now, 0
        count += 1
        self._windows[key] = (start, count)
        if (
            len(self._windows) > self.max_keys
            and now - self._last_prune >= self.window
        ):
            self.prune()
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=max(start + self.window - now, 0.0),
        )

    def prune(self) -> None:
        now = self._clock()
        self._last_prune = now
        self._windows = {
            k: v for k, v in self._windows.items() if now - v[0] < self.window
        }

    @staticmethod
    def headers(decision: RateLimitDecision) -> dict[str, str]:
        headers = {
            "RateLimit-Limit": str(decision.limit),
            "RateLimit-Remaining": str(decision.remaining),
            "RateLimit-Reset": str(math.ceil(decision.reset_after)),
        }
        if not decision.allowed:
            headers["Retry-After"] = str(math.ceil(decision.reset_after))
        return headers
