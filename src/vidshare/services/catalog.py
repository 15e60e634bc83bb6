# src/vidshare/services/catalog.py
"""Channel and video catalog operations."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Query, Session

from vidshare.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from vidshare.models import Channel, Role, User, Video, VideoType, Visibility
from vidshare.schemas.video import ChannelCreate, VideoCreate

__all__ = [
    "create_channel",
    "get_channel",
    "create_video",
    "get_video",
    "get_visible_video",
    "can_view_video",
    "public_videos",
]

logger = logging.getLogger(__name__)


def create_channel(db: Session, owner: User, data: ChannelCreate) -> Channel:
    """Create the caller's channel and promote plain users to creators.

    Raises:
        ValidationFailedError: If the caller already owns a channel or the
            handle is taken.
    """
    if db.query(Channel).filter(Channel.owner_id == owner.id).first() is not None:
        raise ValidationFailedError(
            "You already have a channel. Each user can only have one channel."
        )
    if db.query(Channel).filter(Channel.handle == data.handle).first() is not None:
        raise ValidationFailedError("This handle is already taken. Please choose another one.")

    channel = Channel(
        owner_id=owner.id,
        name=data.name,
        handle=data.handle,
        description=data.description,
    )
    db.add(channel)
    if owner.role == Role.USER:
        owner.role = Role.CREATOR
    db.commit()
    db.refresh(channel)
    logger.info("User %s created channel %s (@%s)", owner.id, channel.id, channel.handle)
    return channel


def get_channel(db: Session, channel_id: int) -> Channel:
    """Return a channel by id or raise ``NotFoundError``."""
    channel = db.get(Channel, channel_id)
    if channel is None:
        raise NotFoundError("Channel not found")
    return channel


def create_video(db: Session, owner: User, data: VideoCreate) -> Video:
    """Register a video on a channel the caller owns."""
    channel = db.get(Channel, data.channel_id)
    if channel is None:
        raise NotFoundError("Channel not found")
    if channel.owner_id != owner.id:
        raise PermissionDeniedError("You don't own this channel")

    video = Video(
        channel_id=channel.id,
        title=data.title,
        description=data.description,
        visibility=data.visibility,
        video_type=data.video_type,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


def get_video(db: Session, video_id: int) -> Video:
    """Return a video by id regardless of visibility."""
    video = db.get(Video, video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return video


def can_view_video(video: Video, user: User | None) -> bool:
    """Private videos are visible only to their channel owner and admins."""
    if video.visibility != Visibility.PRIVATE:
        return True
    if user is None:
        return False
    return user.is_admin or video.channel.owner_id == user.id


def get_visible_video(db: Session, video_id: int, user: User | None) -> Video:
    """Return a video the caller may see.

    Hidden videos are reported as missing rather than forbidden.
    """
    video = get_video(db, video_id)
    if not can_view_video(video, user):
        raise NotFoundError("Video not found")
    return video


def public_videos(
    db: Session,
    *,
    channel_id: int | None = None,
    video_type: VideoType | None = None,
) -> Query:
    """Query public videos, newest first."""
    query = db.query(Video).filter(Video.visibility == Visibility.PUBLIC)
    if channel_id is not None:
        query = query.filter(Video.channel_id == channel_id)
    if video_type is not None:
        query = query.filter(Video.video_type == video_type)
    return query.order_by(Video.created_at.desc(), Video.id.desc())
