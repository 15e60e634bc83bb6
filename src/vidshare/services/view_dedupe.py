"""Server-side record of which videos a viewer has already been counted for."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import Lock
from typing import Final

import redis

from vidshare.core.settings import settings
from vidshare.services.cache import get_redis

logger = logging.getLogger(__name__)

_KEY_PREFIX: Final[str] = "viewdedupe"


@dataclass
class _ViewerEntry:
    """Ordered set of counted video ids plus the moment the whole set lapses."""

    videos: OrderedDict[int, None] = field(default_factory=OrderedDict)
    expires_at: float = 0.0


class ViewDedupeService:
    """Bounded, expiring set of counted views per viewer.

    Each viewer (``user:<id>`` or ``session:<token>``) owns an insertion-ordered
    set of video ids. Recording a new id appends it, evicts the oldest ids
    beyond ``capacity`` and pushes the set's expiry ``window_seconds`` into the
    future. Re-viewing an id already in the set changes nothing, so its place in
    the eviction order is fixed by the first counted view.

    Backed by Redis when configured, otherwise by a lock-guarded in-process map.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        *,
        window_seconds: int | None = None,
        capacity: int | None = None,
    ) -> None:
        self._redis = redis_client
        self.window_seconds = (
            settings.view_dedupe_window_seconds if window_seconds is None else window_seconds
        )
        self.capacity = settings.view_dedupe_capacity if capacity is None else capacity

    def claim(self, viewer_key: str, video_id: int) -> bool:
        """Record ``video_id`` for ``viewer_key`` if it is not already present.

        Returns:
            True when the view is new and should be counted; False when the
            viewer was already counted for this video within the window.
        """
        if self._redis is not None:
            try:
                return self._claim_redis(viewer_key, video_id)
            except redis.RedisError as exc:
                logger.warning("View dedupe falling back to local store: %s", exc)
                self._redis = None
        return self._claim_local(viewer_key, video_id)

    def release(self, viewer_key: str, video_id: int) -> None:
        """Forget a claim whose view could not be persisted."""
        if self._redis is not None:
            try:
                self._redis.zrem(self._key(viewer_key), str(video_id))
                return
            except redis.RedisError as exc:
                logger.warning("View dedupe falling back to local store: %s", exc)
                self._redis = None
        with _LOCAL_LOCK:
            entry = _LOCAL_VIEWS.get(viewer_key)
            if entry is not None:
                entry.videos.pop(video_id, None)

    def has_viewed(self, viewer_key: str, video_id: int) -> bool:
        """Return True if ``video_id`` is currently recorded for the viewer."""
        if self._redis is not None:
            try:
                return self._redis.zscore(self._key(viewer_key), str(video_id)) is not None
            except redis.RedisError as exc:
                logger.warning("View dedupe falling back to local store: %s", exc)
                self._redis = None
        with _LOCAL_LOCK:
            entry = self._live_entry(viewer_key, time.time())
            return entry is not None and video_id in entry.videos

    # --- Redis backend ------------------------------------------------------------
    @staticmethod
    def _key(viewer_key: str) -> str:
        return f"{_KEY_PREFIX}:{viewer_key}"

    def _claim_redis(self, viewer_key: str, video_id: int) -> bool:
        key = self._key(viewer_key)
        # Score is insertion time so rank order is FIFO order.
        added = self._redis.zadd(key, {str(video_id): time.time_ns()}, nx=True)
        if not added:
            return False
        pipe = self._redis.pipeline()
        if self.capacity > 0:
            pipe.zremrangebyrank(key, 0, -(self.capacity + 1))
        pipe.expire(key, int(self.window_seconds))
        pipe.execute()
        return True

    # --- Local backend ------------------------------------------------------------
    @staticmethod
    def _live_entry(viewer_key: str, now: float) -> _ViewerEntry | None:
        entry = _LOCAL_VIEWS.get(viewer_key)
        if entry is not None and entry.expires_at <= now:
            _LOCAL_VIEWS.pop(viewer_key, None)
            return None
        return entry

    def _claim_local(self, viewer_key: str, video_id: int) -> bool:
        now = time.time()
        with _LOCAL_LOCK:
            _sweep_expired(now)
            entry = self._live_entry(viewer_key, now)
            if entry is None:
                entry = _ViewerEntry()
                _LOCAL_VIEWS[viewer_key] = entry
            if video_id in entry.videos:
                return False
            entry.videos[video_id] = None
            if self.capacity > 0:
                while len(entry.videos) > self.capacity:
                    entry.videos.popitem(last=False)
            entry.expires_at = now + self.window_seconds
            _LOCAL_VIEWS.move_to_end(viewer_key)
            return True


# Ordered by last counted view; the front holds the soonest-expiring viewers.
_LOCAL_VIEWS: OrderedDict[str, _ViewerEntry] = OrderedDict()
_LOCAL_LOCK = Lock()


def _sweep_expired(now: float) -> None:
    """Drop lapsed viewers from the front of the store; caller holds the lock."""
    while _LOCAL_VIEWS:
        viewer_key, entry = next(iter(_LOCAL_VIEWS.items()))
        if entry.expires_at > now:
            break
        del _LOCAL_VIEWS[viewer_key]


def clear_local_views() -> None:
    """Drop every in-process dedupe entry."""
    with _LOCAL_LOCK:
        _LOCAL_VIEWS.clear()


def get_view_dedupe_service() -> ViewDedupeService:
    """Return a dedupe service bound to the configured backend."""
    return ViewDedupeService(get_redis())
