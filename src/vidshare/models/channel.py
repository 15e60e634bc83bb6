# src/vidshare/models/channel.py
"""Models for creator channels and viewer subscriptions."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.session import Base
from vidshare.db.time import utcnow


class ChannelStatus(str, Enum):
    """Administrative standing of a channel."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    TERMINATED = "TERMINATED"


class NotificationLevel(str, Enum):
    """How loudly a subscriber wants to hear about new uploads."""

    ALL = "ALL"
    PERSONALIZED = "PERSONALIZED"
    NONE = "NONE"


class Channel(Base):
    """A creator's publishing identity.

    ``subscriber_count`` and ``total_views`` are denormalized aggregates kept in
    step with ``Subscription`` rows and counted video views.
    """

    __tablename__ = "channel"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    handle: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ChannelStatus] = mapped_column(
        SAEnum(ChannelStatus, native_enum=False, length=16),
        nullable=False,
        default=ChannelStatus.ACTIVE,
    )
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    monetization_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Set only when the strike threshold suspended the channel.
    suspended_by_strikes: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    subscriber_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    owner: Mapped["User"] = relationship("User", back_populates="channels")  # noqa: F821


class Subscription(Base):
    """Ledger row for a viewer following a channel."""

    __tablename__ = "subscription"
    __table_args__ = (
        UniqueConstraint("user_id", "channel_id", name="uq_subscription_user_channel"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("channel.id", ondelete="CASCADE"),
        nullable=False,
    )
    notification_level: Mapped[NotificationLevel] = mapped_column(
        SAEnum(NotificationLevel, native_enum=False, length=16),
        nullable=False,
        default=NotificationLevel.PERSONALIZED,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    channel: Mapped[Channel] = relationship("Channel")
