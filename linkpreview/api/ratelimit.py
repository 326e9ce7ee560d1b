"""Per-client sliding-window rate limiting for the preview endpoint."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    """Raised by :func:`enforce_rate_limit`; rendered as ``429``."""

    def __init__(self, key: str) -> None:
        super().__init__(f"rate limit exceeded for {key}")
        self.key = key


class InMemoryRateLimiter:
    """Allow at most ``limit`` events per ``period_seconds`` per key.

    Keys whose newest event has left the window are dropped, so the table only
    holds clients seen within the last period.
    """

    def __init__(self, limit: int, period_seconds: float) -> None:
        self.limit = limit
        self.period_seconds = period_seconds
        self._events: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = time.monotonic()

    def _sweep(self, now: float) -> None:
        cutoff = now - self.period_seconds
        stale = [key for key, dq in self._events.items() if not dq or dq[-1] <= cutoff]
        for key in stale:
            del self._events[key]
        self._last_sweep = now

    def allow(self, key: str) -> bool:
        with self._lock:
            now = time.monotonic()
            if now - self._last_sweep >= self.period_seconds:
                self._sweep(now)
            dq = self._events.setdefault(key, deque())
            while dq and dq[0] <= now - self.period_seconds:
                dq.popleft()
            if len(dq) >= self.limit:
                return False
            dq.append(now)
            return True

    def __len__(self) -> int:
        return len(self._events)


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency: reject the request once its client is over budget."""
    limiter: InMemoryRateLimiter = request.app.state.rate_limiter
    key = _client_key(request)
    if not limiter.allow(key):
        logger.warning("Rate limit exceeded for %s", key)
        raise RateLimitExceeded(key)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": "Too many requests"},
        headers={"Retry-After": str(int(request.app.state.rate_limiter.period_seconds))},
    )
