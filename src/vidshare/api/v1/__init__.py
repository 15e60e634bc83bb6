# src/vidshare/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    channels_router,
    contact_router,
    copyright_router,
    faq_admin_router,
    faq_router,
    monetization_router,
    notifications_router,
    playlists_router,
    subscriptions_router,
    users_router,
    videos_router,
)

__all__ = [
    "auth_router",
    "videos_router",
    "channels_router",
    "users_router",
    "subscriptions_router",
    "notifications_router",
    "playlists_router",
    "monetization_router",
    "copyright_router",
    "contact_router",
    "faq_router",
    "faq_admin_router",
    "admin_router",
]
