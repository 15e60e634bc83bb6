"""Fixed-window request throttling."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock

import redis

from vidshare.core.errors import RateLimitedError
from vidshare.core.settings import settings
from vidshare.services.cache import get_redis

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    resets_at: float


class RateLimiter:
    """Allow at most ``limit`` hits per ``window_seconds`` for each key."""

    def __init__(
        self,
        scope: str,
        *,
        limit: int,
        window_seconds: int,
        message: str = "Too many requests, please try again later.",
        redis_client: redis.Redis | None = None,
    ) -> None:
        self.scope = scope
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self._redis = redis_client

    def hit(self, key: str) -> None:
        """Count one request for ``key``.

        Raises:
            RateLimitedError: If the key has exhausted its budget for the window.
        """
        bucket = f"ratelimit:{self.scope}:{key}"
        if self._redis is not None:
            try:
                self._hit_redis(bucket)
                return
            except redis.RedisError as exc:
                logger.warning("Rate limiter falling back to local store: %s", exc)
                self._redis = None
        self._hit_local(bucket)

    def _hit_redis(self, bucket: str) -> None:
        pipe = self._redis.pipeline()
        pipe.incr(bucket)
        pipe.expire(bucket, self.window_seconds, nx=True)
        pipe.ttl(bucket)
        count, _, ttl = pipe.execute()
        if int(count) > self.limit:
            raise RateLimitedError(self.message, retry_after=max(int(ttl), 1))

    def _hit_local(self, bucket: str) -> None:
        now = time.time()
        with _LOCAL_LOCK:
            _sweep_expired(now)
            window = _LOCAL_WINDOWS.get(bucket)
            if window is None or window.resets_at <= now:
                _LOCAL_WINDOWS.pop(bucket, None)
                _LOCAL_WINDOWS[bucket] = _Window(count=1, resets_at=now + self.window_seconds)
                return
            if window.count >= self.limit:
                retry_after = int(window.resets_at - now) + 1
                raise RateLimitedError(self.message, retry_after=retry_after)
            window.count += 1


# Insertion order is window start order; the front holds the oldest windows.
_LOCAL_WINDOWS: OrderedDict[str, _Window] = OrderedDict()
_LOCAL_LOCK = Lock()


def _sweep_expired(now: float) -> None:
    """Drop lapsed windows from the front of the store; caller holds the lock."""
    while _LOCAL_WINDOWS:
        bucket, window = next(iter(_LOCAL_WINDOWS.items()))
        if window.resets_at > now:
            break
        del _LOCAL_WINDOWS[bucket]


def clear_local_windows() -> None:
    """Drop every in-process rate-limit window."""
    with _LOCAL_LOCK:
        _LOCAL_WINDOWS.clear()


def get_contact_rate_limiter() -> RateLimiter:
    """Return the limiter guarding the public contact form."""
    return RateLimiter(
        "contact",
        limit=settings.contact_rate_limit_max,
        window_seconds=settings.contact_rate_limit_window_seconds,
        message="Too many submissions. Please try again later.",
        redis_client=get_redis(),
    )
