"""Tests for the fixed-window rate limiter."""

from __future__ import annotations

from types import SimpleNamespace

from wellness_report.api.rate_limit import FixedWindowRateLimiter, client_key


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _limiter(max_requests: int = 2, window: float = 60.0) -> tuple[FixedWindowRateLimiter, _Clock]:
    clock = _Clock()
    return FixedWindowRateLimiter(max_requests, window, clock=clock), clock


class TestFixedWindowRateLimiter:
    def test_allows_up_to_budget(self) -> None:
        limiter, _ = _limiter()
        decisions = [limiter.hit("a") for _ in range(3)]
        assert [d.allowed for d in decisions] == [True, True, False]
        assert [d.remaining for d in decisions] == [1, 0, 0]

    def test_window_resets(self) -> None:
        limiter, clock = _limiter(max_requests=1)
        assert limiter.hit("a").allowed
        assert not limiter.hit("a").allowed
        clock.now += 60.0
        assert limiter.hit("a").allowed

    def test_reset_after_counts_down(self) -> None:
        limiter, clock = _limiter(window=60.0)
        limiter.hit("a")
        clock.now += 45.0
        assert limiter.hit("a").reset_after == 15.0

    def test_keys_are_independent(self) -> None:
        limiter, _ = _limiter(max_requests=1)
        assert limiter.hit("a").allowed
        assert limiter.hit("b").allowed
        assert not limiter.hit("a").allowed


def _request(forwarded: str | None = None, host: str = "1.2.3.4") -> SimpleNamespace:
    headers = {"x-forwarded-for": forwarded} if forwarded is not None else {}
    return SimpleNamespace(headers=headers, client=SimpleNamespace(host=host))


class TestClientKey:
    def test_direct_client(self) -> None:
        assert client_key(_request(), trust_proxy=True) == "1.2.3.4"

    def test_last_forwarded_hop_when_trusted(self) -> None:
        assert client_key(_request("9.9.9.9, 10.0.0.7"), trust_proxy=True) == "10.0.0.7"

    def test_forwarded_ignored_when_untrusted(self) -> None:
        assert client_key(_request("9.9.9.9"), trust_proxy=False) == "1.2.3.4"

    def test_no_client(self) -> None:
        request = SimpleNamespace(headers={}, client=None)
        assert client_key(request, trust_proxy=False) == "unknown"
