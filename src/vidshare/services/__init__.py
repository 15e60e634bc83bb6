# src/vidshare/services/__init__.py
"""Business logic services for the video platform."""

from .moderation import ModerationService
from .rate_limit import RateLimiter
from .view_dedupe import ViewDedupeService

__all__ = [
    "ModerationService",
    "RateLimiter",
    "ViewDedupeService",
]
