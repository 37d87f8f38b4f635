from __future__ import annotations

from venue_backend.shared.middleware.rate_limit import InMemoryRateLimiter


class FakeMonotonic:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_limit_resets_after_window() -> None:
    clock = FakeMonotonic()
    limiter = InMemoryRateLimiter(2, 10.0, clock=clock)

    assert [limiter.allow("a") for _ in range(3)] == [True, True, False]

    clock.now += 11
    assert limiter.allow("a") is True


def test_idle_buckets_are_evicted() -> None:
    clock = FakeMonotonic()
    limiter = InMemoryRateLimiter(2, 10.0, clock=clock)

    for n in range(50):
        limiter.allow(f"client-{n}")
    assert len(limiter) == 50

    clock.now += 11
    limiter.allow("late")

    assert len(limiter) == 1
