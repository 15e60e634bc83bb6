# src/vidshare/models/notification.py
"""In-app notifications delivered to users."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.db.session import Base
from vidshare.db.time import utcnow


class NotificationType(str, Enum):
    """Origin of a notification."""

    SYSTEM = "SYSTEM"
    SUBSCRIPTION = "SUBSCRIPTION"


class Notification(Base):
    """Message shown in a user's notification tray."""

    __tablename__ = "notification"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[NotificationType] = mapped_column(
        SAEnum(NotificationType, native_enum=False, length=16),
        nullable=False,
        default=NotificationType.SYSTEM,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    video_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="SET NULL"),
        nullable=True,
    )
    channel_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("channel.id", ondelete="SET NULL"),
        nullable=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
