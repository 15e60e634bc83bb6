# src/vidshare/schemas/admin.py
"""Admin-only request and response schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.user import Role, UserStatus
from vidshare.models.video import Visibility
from vidshare.schemas.moderation import StrikeResponse
from vidshare.schemas.video import ChannelResponse

ChannelAction = Literal[
    "verify",
    "unverify",
    "suspend",
    "restore",
    "enable_monetization",
    "disable_monetization",
    "warn",
]
VideoAction = Literal[
    "remove",
    "restore",
    "age_restrict",
    "remove_age_restriction",
    "set_visibility",
    "disable_comments",
    "enable_comments",
]
UserAction = Literal["suspend", "ban", "warn", "restore", "change_role", "update_trust_score"]


class ChannelAdminAction(BaseModel):
    """Admin action against a channel."""

    action: ChannelAction
    reason: str | None = None
    notes: str | None = None


class VideoAdminAction(BaseModel):
    """Admin action against a video."""

    action: VideoAction
    visibility: Visibility | None = None
    reason: str | None = None
    notes: str | None = None
    apply_strike: bool = False


class AuditLogResponse(BaseModel):
    """An audit trail entry."""

    id: int
    admin_id: int | None
    action: str
    target_type: str
    target_id: int
    old_value: dict[str, Any] | None
    new_value: dict[str, Any] | None
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnalyticsOverview(BaseModel):
    """Platform totals and recent activity."""

    period_days: int
    total_users: int
    total_channels: int
    total_videos: int
    new_users: int
    new_channels: int
    new_videos: int
    pending_flags: int
    pending_claims: int
    active_strikes: int
    total_views: int
    total_likes: int
    verified_channels: int
    monetized_channels: int
    users_by_role: dict[str, int]
    videos_by_visibility: dict[str, int]
    flags_by_status: dict[str, int]
    flags_by_reason: dict[str, int]
    claims_by_status: dict[str, int]
    revenue_in_period: float


class UserAdminAction(BaseModel):
    """Admin action against an account."""

    action: UserAction
    role: Role | None = None
    trust_score: int | None = Field(None, ge=0, le=100)
    reason: str | None = None
    notes: str | None = None


class UserAdminResponse(BaseModel):
    """Account as seen by administrators."""

    id: int
    email: str
    name: str
    username: str | None
    role: Role
    status: UserStatus
    trust_score: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserAdminDetail(UserAdminResponse):
    """Account plus its channels, active strikes and report activity."""

    channels: list[ChannelResponse]
    active_strikes: list[StrikeResponse]
    flag_count: int
