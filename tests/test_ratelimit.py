"""Tests for the in-memory sliding-window limiter.

``time.monotonic`` is replaced with a settable clock so window expiry is
exercised without sleeping.
"""

from __future__ import annotations

import pytest

from linkpreview.api import ratelimit
from linkpreview.api.ratelimit import InMemoryRateLimiter


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock(monkeypatch) -> _Clock:
    fake = _Clock()
    monkeypatch.setattr(ratelimit.time, "monotonic", fake)
    return fake


class TestWindow:
    def test_refuses_once_limit_reached(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=2, period_seconds=60)
        assert limiter.allow("1.2.3.4")
        assert limiter.allow("1.2.3.4")
        assert not limiter.allow("1.2.3.4")

    def test_keys_are_independent(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=1, period_seconds=60)
        assert limiter.allow("1.2.3.4")
        assert limiter.allow("5.6.7.8")
        assert not limiter.allow("1.2.3.4")

    def test_allows_again_after_window(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=1, period_seconds=60)
        assert limiter.allow("1.2.3.4")
        clock.now += 60
        assert limiter.allow("1.2.3.4")

    def test_refused_requests_do_not_extend_the_window(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=1, period_seconds=60)
        assert limiter.allow("1.2.3.4")
        clock.now += 30
        assert not limiter.allow("1.2.3.4")
        clock.now += 30
        assert limiter.allow("1.2.3.4")


class TestIdleKeys:
    def test_one_off_clients_are_forgotten(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=5, period_seconds=60)
        for i in range(1000):
            limiter.allow(f"10.0.{i // 256}.{i % 256}")
        assert len(limiter) == 1000

        clock.now += 61
        limiter.allow("203.0.113.9")

        assert len(limiter) == 1

    def test_active_clients_survive_a_sweep(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=5, period_seconds=60)
        limiter.allow("idle")
        clock.now += 40
        limiter.allow("busy")
        clock.now += 25
        limiter.allow("newcomer")

        assert len(limiter) == 2
        assert limiter.allow("busy")

    def test_table_stays_bounded_under_rotating_keys(self, clock) -> None:
        limiter = InMemoryRateLimiter(limit=1, period_seconds=10)
        for i in range(5000):
            clock.now += 1
            limiter.allow(f"client-{i}")
        # Only keys from roughly the last two windows can still be held.
        assert len(limiter) <= 20
