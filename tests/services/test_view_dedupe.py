# tests/services/test_view_dedupe.py
"""Tests for the view dedupe store and its Redis backend."""

from unittest.mock import ANY, MagicMock, patch

import redis

from vidshare.services import view_dedupe
from vidshare.services.view_dedupe import ViewDedupeService


def test_first_claim_counts_and_repeat_does_not() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    assert service.claim("user:1", 10) is True
    assert service.claim("user:1", 10) is False
    assert service.has_viewed("user:1", 10) is True


def test_viewers_are_tracked_independently() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    assert service.claim("user:1", 10) is True
    assert service.claim("session:abcdefghijklmnop", 10) is True


def test_oldest_entry_evicted_past_capacity() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    for video_id in range(1, 102):
        assert service.claim("user:1", video_id) is True

    # Video 1 was pushed out by the 101st distinct video.
    assert service.has_viewed("user:1", 1) is False
    assert service.has_viewed("user:1", 2) is True
    assert service.claim("user:1", 1) is True


def test_repeat_view_does_not_refresh_eviction_order() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=3)
    for video_id in (1, 2, 3):
        service.claim("user:1", video_id)
    assert service.claim("user:1", 1) is False

    service.claim("user:1", 4)
    assert service.has_viewed("user:1", 1) is False
    assert service.has_viewed("user:1", 4) is True


def test_zero_capacity_never_evicts() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=0)
    for video_id in range(500):
        service.claim("user:1", video_id)
    assert service.has_viewed("user:1", 0) is True


def test_entries_lapse_after_window() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_000.0):
        assert service.claim("user:1", 10) is True
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_061.0):
        assert service.has_viewed("user:1", 10) is False
        assert service.claim("user:1", 10) is True


def test_release_forgets_claim() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    service.claim("user:1", 10)
    service.release("user:1", 10)
    assert service.claim("user:1", 10) is True


def test_lapsed_viewers_are_swept_from_local_store() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_000.0):
        for n in range(1000):
            service.claim(f"session:anon-{n:012d}", 10)
    assert len(view_dedupe._LOCAL_VIEWS) == 1000

    with patch("vidshare.services.view_dedupe.time.time", return_value=1_100.0):
        service.claim("user:1", 10)
    assert list(view_dedupe._LOCAL_VIEWS) == ["user:1"]


def test_sweep_keeps_viewers_still_inside_window() -> None:
    service = ViewDedupeService(window_seconds=60, capacity=100)
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_000.0):
        service.claim("user:1", 10)
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_030.0):
        service.claim("user:2", 10)
    with patch("vidshare.services.view_dedupe.time.time", return_value=1_070.0):
        service.claim("user:3", 10)
        assert service.has_viewed("user:2", 10) is True
    assert list(view_dedupe._LOCAL_VIEWS) == ["user:2", "user:3"]


def _redis_client(added: int = 1) -> MagicMock:
    client = MagicMock()
    client.zadd.return_value = added
    return client


def test_redis_claim_records_insertion_time_and_trims_to_capacity() -> None:
    client = _redis_client()
    service = ViewDedupeService(client, window_seconds=86400, capacity=100)

    assert service.claim("user:1", 10) is True

    client.zadd.assert_called_once_with("viewdedupe:user:1", {"10": ANY}, nx=True)
    pipe = client.pipeline.return_value
    # Ranks 0 .. -101 are everything but the newest 100 members.
    pipe.zremrangebyrank.assert_called_once_with("viewdedupe:user:1", 0, -101)
    pipe.expire.assert_called_once_with("viewdedupe:user:1", 86400)
    pipe.execute.assert_called_once()


def test_redis_repeat_claim_leaves_set_untouched() -> None:
    client = _redis_client(added=0)
    service = ViewDedupeService(client, window_seconds=86400, capacity=100)

    assert service.claim("user:1", 10) is False
    client.pipeline.assert_not_called()


def test_redis_zero_capacity_only_refreshes_expiry() -> None:
    client = _redis_client()
    service = ViewDedupeService(client, window_seconds=60, capacity=0)

    service.claim("session:abcdefghijklmnop", 10)

    pipe = client.pipeline.return_value
    pipe.zremrangebyrank.assert_not_called()
    pipe.expire.assert_called_once_with("viewdedupe:session:abcdefghijklmnop", 60)


def test_redis_release_and_lookup() -> None:
    client = _redis_client()
    client.zscore.side_effect = [1.0, None]
    service = ViewDedupeService(client, window_seconds=60, capacity=100)

    assert service.has_viewed("user:1", 10) is True
    service.release("user:1", 10)
    client.zrem.assert_called_once_with("viewdedupe:user:1", "10")
    assert service.has_viewed("user:1", 10) is False


def test_redis_failure_falls_back_to_local_store() -> None:
    client = MagicMock()
    client.zadd.side_effect = redis.ConnectionError("down")
    service = ViewDedupeService(client, window_seconds=60, capacity=100)

    assert service.claim("user:1", 10) is True
    assert service.claim("user:1", 10) is False
    assert client.zadd.call_count == 1
