# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from flask import Request, current_app, jsonify, request

from venue_backend.shared.config import AppConfig


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._buckets: dict[str, Bucket] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def _prune(self, bucket: Bucket, now: float) -> None:
        while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
            bucket.timestamps.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._buckets):
            bucket = self._buckets[key]
            self._prune(bucket, now)
            if not bucket.timestamps:
                del self._buckets[key]
        self._last_sweep = now

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._buckets[key] = Bucket(deque(maxlen=self._limit))
            self._prune(bucket, now)
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def _client_key(req: Request) -> str:
    # Forwarded headers are only honoured through ProxyFix (TRUSTED_PROXIES).
    return req.remote_addr or "unknown"


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Per-client sliding window limit, sized from the app's config on first use."""

    def decorator(f: Callable):
        def _limiter_for(config: AppConfig) -> InMemoryRateLimiter:
            limiters = current_app.extensions.setdefault("rate_limiters", {})
            limiter = limiters.get(f.__qualname__)
            if limiter is None:
                limiter = InMemoryRateLimiter(
                    limit or config.security.rate_limit_requests,
                    window_seconds or config.security.rate_limit_window,
                )
                limiters[f.__qualname__] = limiter
            return limiter

        @wraps(f)
        def wrapper(*args, **kwargs):
            config: AppConfig = current_app.config["APP_CONFIG"]
            if config.security.enable_rate_limit:
                key = f"{request.path}:{_client_key(request)}"
                if not _limiter_for(config).allow(key):
                    return jsonify({"error": "Too many requests", "code": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
