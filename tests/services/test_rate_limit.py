# tests/services/test_rate_limit.py
"""Tests for the fixed-window rate limiter."""

from unittest.mock import MagicMock, patch

import pytest
import redis

from vidshare.core.errors import RateLimitedError
from vidshare.services import rate_limit
from vidshare.services.rate_limit import RateLimiter


def test_allows_up_to_limit_then_blocks() -> None:
    limiter = RateLimiter("test", limit=3, window_seconds=3600)
    for _ in range(3):
        limiter.hit("203.0.113.9")

    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("203.0.113.9")
    assert exc_info.value.status_code == 429
    assert 0 < exc_info.value.retry_after <= 3601


def test_keys_do_not_share_budget() -> None:
    limiter = RateLimiter("test", limit=1, window_seconds=3600)
    limiter.hit("a")
    limiter.hit("b")
    with pytest.raises(RateLimitedError):
        limiter.hit("a")


def test_window_resets() -> None:
    limiter = RateLimiter("test", limit=1, window_seconds=10)
    with patch("vidshare.services.rate_limit.time.time", return_value=100.0):
        limiter.hit("a")
    with patch("vidshare.services.rate_limit.time.time", return_value=111.0):
        limiter.hit("a")


def test_lapsed_windows_are_swept_from_local_store() -> None:
    limiter = RateLimiter("test", limit=5, window_seconds=10)
    with patch("vidshare.services.rate_limit.time.time", return_value=100.0):
        for n in range(1000):
            limiter.hit(f"198.51.100.{n}")
    assert len(rate_limit._LOCAL_WINDOWS) == 1000

    with patch("vidshare.services.rate_limit.time.time", return_value=200.0):
        limiter.hit("203.0.113.1")
    assert list(rate_limit._LOCAL_WINDOWS) == ["ratelimit:test:203.0.113.1"]


def test_expired_window_behind_a_live_one_still_resets() -> None:
    short = RateLimiter("short", limit=1, window_seconds=10)
    long = RateLimiter("long", limit=1, window_seconds=3600)
    with patch("vidshare.services.rate_limit.time.time", return_value=100.0):
        long.hit("a")
        short.hit("a")
    with patch("vidshare.services.rate_limit.time.time", return_value=111.0):
        short.hit("a")


def _redis_client(count: int, ttl: int) -> MagicMock:
    client = MagicMock()
    client.pipeline.return_value.execute.return_value = [count, True, ttl]
    return client


def test_redis_window_is_set_once_per_bucket() -> None:
    client = _redis_client(count=1, ttl=3600)
    limiter = RateLimiter("contact", limit=3, window_seconds=3600, redis_client=client)

    limiter.hit("203.0.113.9")

    pipe = client.pipeline.return_value
    pipe.incr.assert_called_once_with("ratelimit:contact:203.0.113.9")
    pipe.expire.assert_called_once_with("ratelimit:contact:203.0.113.9", 3600, nx=True)
    pipe.ttl.assert_called_once_with("ratelimit:contact:203.0.113.9")
    pipe.execute.assert_called_once()


def test_redis_over_limit_reports_remaining_ttl() -> None:
    limiter = RateLimiter(
        "contact",
        limit=3,
        window_seconds=3600,
        redis_client=_redis_client(count=4, ttl=1234),
    )
    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("203.0.113.9")
    assert exc_info.value.retry_after == 1234


def test_redis_missing_ttl_still_asks_for_a_second() -> None:
    limiter = RateLimiter(
        "contact",
        limit=3,
        window_seconds=3600,
        redis_client=_redis_client(count=9, ttl=-1),
    )
    with pytest.raises(RateLimitedError) as exc_info:
        limiter.hit("203.0.113.9")
    assert exc_info.value.retry_after == 1


def test_redis_failure_falls_back_to_local_store() -> None:
    client = MagicMock()
    client.pipeline.return_value.execute.side_effect = redis.ConnectionError("down")
    limiter = RateLimiter("test", limit=1, window_seconds=60, redis_client=client)

    limiter.hit("a")
    with pytest.raises(RateLimitedError):
        limiter.hit("a")
    assert client.pipeline.call_count == 1
