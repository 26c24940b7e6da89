"""Fixed-window, per-client request limiting."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request

from wellness_report.exceptions import RateLimitExceeded

TOO_MANY_REQUESTS_MESSAGE = "Too many requests, please try again later."


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """In-process counter per client key, reset every ``window_seconds``.

    Uses ``time.monotonic()`` by default so windows are immune to wall-clock
    adjustments.  State is per process; several workers each keep their own.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max = max_requests
        self._window = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self._window:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            self._evict(now)
        reset_after = max(self._window - (now - started), 0.0)
        return RateLimitDecision(
            allowed=count <= self._max,
            remaining=max(self._max - count, 0),
            reset_after=reset_after,
        )

    def _evict(self, now: float) -> None:
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self._window]
        for key in expired:
            del self._windows[key]


def client_key(request: Request, trust_proxy: bool) -> str:
    """Client address; behind one trusted proxy that is the last X-Forwarded-For hop."""
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """Router dependency: count the request and reject it once over budget."""
    limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
    trust_proxy = request.app.state.settings.api.trust_proxy
    decision = limiter.hit(client_key(request, trust_proxy))
    if not decision.allowed:
        raise RateLimitExceeded(TOO_MANY_REQUESTS_MESSAGE, retry_after=math.ceil(decision.reset_after))
