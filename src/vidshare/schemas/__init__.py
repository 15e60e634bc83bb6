# src/vidshare/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import AnalyticsOverview, AuditLogResponse, ChannelAdminAction, VideoAdminAction
from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse, UserSummary
from .common import MessageResponse, Page, Pagination, StatusPage
from .engagement import (
    BlockRequest,
    BlockResponse,
    MyVoteResponse,
    NotificationMarkRead,
    NotificationResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    SubscriptionToggleResult,
    SubscriptionUpdate,
    ViewResult,
    VoteRequest,
    VoteResult,
    WatchHistoryResponse,
    WatchLaterRequest,
    WatchLaterResponse,
)
from .moderation import (
    ClaimCreate,
    ClaimDecision,
    ClaimDetailResponse,
    ClaimResponse,
    CounterNoticeRequest,
    FlagCreate,
    FlagDecision,
    FlagDetailResponse,
    FlagResponse,
    StrikeCreate,
    StrikeDetailResponse,
    StrikeResponse,
    StrikeUpdate,
)
from .monetization import (
    MonetizationSummary,
    MonetizationToggle,
    PayoutHistory,
    PayoutRequest,
    TransactionResponse,
)
from .playlist import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistReorder,
    PlaylistResponse,
    PlaylistUpdate,
    PlaylistVideoRequest,
)
from .support import (
    ContactCreate,
    ContactResponse,
    ContactUpdate,
    FAQCreate,
    FAQResponse,
    FAQUpdate,
)
from .video import ChannelCreate, ChannelResponse, VideoCreate, VideoResponse

__all__ = [
    "AnalyticsOverview", "AuditLogResponse", "ChannelAdminAction", "VideoAdminAction",
    "LoginRequest", "RegisterRequest", "TokenResponse", "UserResponse", "UserSummary",
    "MessageResponse", "Page", "Pagination", "StatusPage",
    "BlockRequest", "BlockResponse", "MyVoteResponse",
    "NotificationMarkRead", "NotificationResponse",
    "SubscriptionRequest", "SubscriptionResponse", "SubscriptionToggleResult",
    "SubscriptionUpdate", "ViewResult", "VoteRequest", "VoteResult",
    "WatchHistoryResponse", "WatchLaterRequest", "WatchLaterResponse",
    "ClaimCreate", "ClaimDecision", "ClaimDetailResponse", "ClaimResponse",
    "CounterNoticeRequest", "FlagCreate", "FlagDecision", "FlagDetailResponse",
    "FlagResponse", "StrikeCreate", "StrikeDetailResponse",
    "StrikeResponse", "StrikeUpdate",
    "MonetizationSummary", "MonetizationToggle", "PayoutHistory", "PayoutRequest",
    "TransactionResponse",
    "PlaylistCreate", "PlaylistDetailResponse", "PlaylistReorder", "PlaylistResponse",
    "PlaylistUpdate", "PlaylistVideoRequest",
    "ContactCreate", "ContactResponse", "ContactUpdate", "FAQCreate", "FAQResponse", "FAQUpdate",
    "ChannelCreate", "ChannelResponse", "VideoCreate", "VideoResponse",
]
