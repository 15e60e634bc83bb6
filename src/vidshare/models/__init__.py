# src/vidshare/models/__init__.py
"""SQLAlchemy models for the video platform."""

from .audit import AuditLog
from .channel import Channel, ChannelStatus, NotificationLevel, Subscription
from .moderation import (
    ClaimStatus,
    ClaimType,
    CopyrightClaim,
    Flag,
    FlagReason,
    FlagStatus,
    Strike,
    StrikeSeverity,
    StrikeType,
)
from .monetization import REVENUE_TYPES, Transaction, TransactionStatus, TransactionType
from .notification import Notification, NotificationType
from .playlist import Playlist, PlaylistVideo
from .support import FAQ, ContactStatus, ContactSubmission
from .user import BlockedUser, Role, User, UserStatus
from .video import Video, VideoType, VideoVote, Visibility, VoteKind, WatchHistory, WatchLater

__all__ = [
    "AuditLog",
    "Channel", "ChannelStatus", "NotificationLevel", "Subscription",
    "ClaimStatus", "ClaimType", "CopyrightClaim",
    "Flag", "FlagReason", "FlagStatus",
    "Strike", "StrikeSeverity", "StrikeType",
    "REVENUE_TYPES", "Transaction", "TransactionStatus", "TransactionType",
    "Notification", "NotificationType",
    "Playlist", "PlaylistVideo",
    "FAQ", "ContactStatus", "ContactSubmission",
    "BlockedUser", "Role", "User", "UserStatus",
    "Video", "VideoType", "VideoVote", "Visibility", "VoteKind", "WatchHistory", "WatchLater",
]
