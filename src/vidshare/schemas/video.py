# src/vidshare/schemas/video.py
"""Video and channel Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.channel import ChannelStatus
from vidshare.models.video import VideoType, Visibility


class ChannelCreate(BaseModel):
    """Schema for creating a channel owned by the caller."""

    name: str = Field(..., min_length=1, max_length=100)
    handle: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    description: str | None = Field(None, max_length=5000)


class ChannelResponse(BaseModel):
    """Schema for channel information returned by the API."""

    id: int
    owner_id: int
    name: str
    handle: str
    description: str | None
    status: ChannelStatus
    verified: bool
    monetization_enabled: bool
    subscriber_count: int
    total_views: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VideoCreate(BaseModel):
    """Schema for registering a video's metadata on one of the caller's channels."""

    channel_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    visibility: Visibility = Visibility.PRIVATE
    video_type: VideoType = VideoType.VIDEO


class VideoResponse(BaseModel):
    """Schema for video information returned by the API."""

    id: int
    channel_id: int
    title: str
    description: str | None
    visibility: Visibility
    video_type: VideoType
    age_restricted: bool
    comments_enabled: bool
    view_count: int
    like_count: int
    dislike_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
