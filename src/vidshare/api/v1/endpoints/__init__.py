# src/vidshare/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .channels import router as channels_router
from .contact import router as contact_router
from .copyright import router as copyright_router
from .faq import admin_router as faq_admin_router
from .faq import router as faq_router
from .monetization import router as monetization_router
from .notifications import router as notifications_router
from .playlists import router as playlists_router
from .subscriptions import router as subscriptions_router
from .users import router as users_router
from .videos import router as videos_router

__all__ = [
    "admin_router",
    "auth_router",
    "channels_router",
    "contact_router",
    "copyright_router",
    "faq_admin_router",
    "faq_router",
    "monetization_router",
    "notifications_router",
    "playlists_router",
    "subscriptions_router",
    "users_router",
    "videos_router",
]
