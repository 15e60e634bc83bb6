# src/vidshare/models/video.py
"""Models for the video catalog and per-viewer engagement ledgers."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.session import Base
from vidshare.db.time import utcnow


class Visibility(str, Enum):
    """Who may see a video or playlist."""

    PUBLIC = "PUBLIC"
    UNLISTED = "UNLISTED"
    PRIVATE = "PRIVATE"


class VideoType(str, Enum):
    """Long-form upload or short."""

    VIDEO = "VIDEO"
    SHORT = "SHORT"


class VoteKind(str, Enum):
    """Direction of a viewer's vote on a video."""

    LIKE = "LIKE"
    DISLIKE = "DISLIKE"


class Video(Base):
    """Catalog entry for an uploaded video.

    ``view_count``, ``like_count`` and ``dislike_count`` are denormalized
    aggregates over the view dedupe store and ``VideoVote`` rows.
    """

    __tablename__ = "video"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    channel_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("channel.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    visibility: Mapped[Visibility] = mapped_column(
        SAEnum(Visibility, native_enum=False, length=16),
        nullable=False,
        default=Visibility.PUBLIC,
    )
    video_type: Mapped[VideoType] = mapped_column(
        SAEnum(VideoType, native_enum=False, length=16),
        nullable=False,
        default=VideoType.VIDEO,
    )
    age_restricted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comments_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    channel: Mapped["Channel"] = relationship("Channel")  # noqa: F821


class VideoVote(Base):
    """Per-user like or dislike on a video."""

    __tablename__ = "video_vote"
    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_video_vote_user_video"),
        Index("ix_video_vote_video_id", "video_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[VoteKind] = mapped_column(
        SAEnum(VoteKind, native_enum=False, length=16),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class WatchHistory(Base):
    """Last time a signed-in viewer had a view counted for a video."""

    __tablename__ = "watch_history"
    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    watched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    video: Mapped[Video] = relationship("Video")


class WatchLater(Base):
    """Saved-for-later bookmark."""

    __tablename__ = "watch_later"
    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_later_user_video"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    video: Mapped[Video] = relationship("Video")
