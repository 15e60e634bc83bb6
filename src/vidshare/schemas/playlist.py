# src/vidshare/schemas/playlist.py
"""Playlist Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.video import Visibility
from vidshare.schemas.video import VideoResponse


class PlaylistCreate(BaseModel):
    """Schema for creating a playlist."""

    title: str = Field(..., min_length=1, max_length=150)
    description: str | None = Field(None, max_length=5000)
    visibility: Visibility = Visibility.PRIVATE


class PlaylistUpdate(BaseModel):
    """Partial update of a playlist's metadata."""

    title: str | None = Field(None, min_length=1, max_length=150)
    description: str | None = Field(None, max_length=5000)
    visibility: Visibility | None = None


class PlaylistVideoRequest(BaseModel):
    """Schema naming a video to add to or remove from a playlist."""

    video_id: int


class PlaylistReorder(BaseModel):
    """New order of a playlist, given as the full list of its video ids."""

    video_ids: list[int] = Field(..., min_length=1)


class PlaylistEntryResponse(BaseModel):
    """A video's slot in a playlist."""

    video_id: int
    position: int
    added_at: datetime
    video: VideoResponse

    model_config = ConfigDict(from_attributes=True)


class PlaylistResponse(BaseModel):
    """Playlist metadata."""

    id: int
    user_id: int
    title: str
    description: str | None
    visibility: Visibility
    video_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PlaylistDetailResponse(PlaylistResponse):
    """Playlist metadata with its ordered entries."""

    entries: list[PlaylistEntryResponse]
