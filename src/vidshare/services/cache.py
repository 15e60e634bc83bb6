"""Shared Redis connection for short-lived server-side state."""

from __future__ import annotations

import logging
from functools import lru_cache

import redis

from vidshare.core.settings import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_redis() -> redis.Redis | None:
    """Return a Redis client when ``REDIS_URL`` is configured, else None.

    Callers treat None as "use the in-process store".
    """
    if not settings.redis_url:
        return None
    logger.info("Using Redis at %s for dedupe and rate-limit state", settings.redis_url)
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)
