# src/vidshare/schemas/engagement.py
"""Schemas for votes, views, subscriptions, blocks and the user library."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.channel import NotificationLevel
from vidshare.models.notification import NotificationType
from vidshare.models.video import VoteKind
from vidshare.schemas.auth import UserSummary
from vidshare.schemas.video import ChannelResponse, VideoResponse


class VoteRequest(BaseModel):
    """Schema for liking or disliking a video."""

    type: VoteKind = Field(..., description="LIKE or DISLIKE")


class VoteResult(BaseModel):
    """Outcome of a vote toggle with the refreshed aggregates."""

    action: Literal["created", "removed", "updated"]
    like_count: int
    dislike_count: int


class MyVoteResponse(BaseModel):
    """The caller's current vote on a video, if any."""

    type: VoteKind | None


class ViewResult(BaseModel):
    """Outcome of a view-count request."""

    success: bool = True
    already_viewed: bool
    view_count: int


class BlockRequest(BaseModel):
    """Schema for blocking another user."""

    blocked_user_id: int


class BlockResponse(BaseModel):
    """A block-list entry."""

    id: int
    blocker_id: int
    blocked_id: int
    created_at: datetime
    blocked: UserSummary

    model_config = ConfigDict(from_attributes=True)


class WatchLaterRequest(BaseModel):
    """Schema for saving a video for later."""

    video_id: int


class WatchLaterResponse(BaseModel):
    """A saved-for-later entry."""

    id: int
    video_id: int
    added_at: datetime
    video: VideoResponse

    model_config = ConfigDict(from_attributes=True)


class WatchHistoryResponse(BaseModel):
    """A watch-history entry."""

    id: int
    video_id: int
    watched_at: datetime
    video: VideoResponse

    model_config = ConfigDict(from_attributes=True)


class SubscriptionRequest(BaseModel):
    """Schema for toggling a subscription to a channel."""

    channel_id: int


class SubscriptionUpdate(BaseModel):
    """Schema for changing a subscription's notification level."""

    channel_id: int
    notification_level: NotificationLevel


class SubscriptionResponse(BaseModel):
    """A subscription with its channel."""

    id: int
    channel_id: int
    notification_level: NotificationLevel
    created_at: datetime
    channel: ChannelResponse

    model_config = ConfigDict(from_attributes=True)


class SubscriptionToggleResult(BaseModel):
    """Outcome of a subscription toggle."""

    subscribed: bool
    subscriber_count: int


class NotificationResponse(BaseModel):
    """A notification in the user's tray."""

    id: int
    type: NotificationType
    title: str
    message: str
    video_id: int | None
    channel_id: int | None
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationMarkRead(BaseModel):
    """Mark specific notifications, or all of them, as read."""

    ids: list[int] | None = None
    all: bool = False
