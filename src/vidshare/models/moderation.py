# src/vidshare/models/moderation.py
"""Models tracking flags, copyright claims and strikes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.session import Base
from vidshare.db.time import utcnow
from vidshare.models.video import Video


class FlagReason(str, Enum):
    """Why a viewer reported a video."""

    SEXUAL_CONTENT = "SEXUAL_CONTENT"
    VIOLENT_CONTENT = "VIOLENT_CONTENT"
    HATEFUL_CONTENT = "HATEFUL_CONTENT"
    SPAM = "SPAM"
    MISLEADING = "MISLEADING"
    COPYRIGHT = "COPYRIGHT"
    HARASSMENT = "HARASSMENT"
    OTHER = "OTHER"


class FlagStatus(str, Enum):
    """Review state of a flag."""

    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"


class ClaimType(str, Enum):
    """Kind of rights asserted in a claim."""

    COPYRIGHT = "COPYRIGHT"
    TRADEMARK = "TRADEMARK"
    OTHER = "OTHER"


class ClaimStatus(str, Enum):
    """Review state of a copyright claim."""

    PENDING = "PENDING"
    UPHELD = "UPHELD"
    REJECTED = "REJECTED"
    COUNTER_NOTICED = "COUNTER_NOTICED"


class StrikeType(str, Enum):
    """Policy area a strike was issued under."""

    COMMUNITY_GUIDELINES = "COMMUNITY_GUIDELINES"
    COPYRIGHT = "COPYRIGHT"
    SPAM = "SPAM"
    MISLEADING = "MISLEADING"
    TERMS_OF_SERVICE = "TERMS_OF_SERVICE"


class StrikeSeverity(str, Enum):
    """Escalation level of a strike."""

    WARNING = "WARNING"
    STRIKE = "STRIKE"
    SUSPENSION = "SUSPENSION"
    TERMINATION = "TERMINATION"


class Flag(Base):
    """A viewer's report against a video.

    A reporter may hold only one PENDING flag per video; resolved or rejected
    flags do not block a new report.
    """

    __tablename__ = "flag"
    __table_args__ = (
        Index(
            "uq_flag_pending_reporter_video",
            "reporter_id",
            "video_id",
            unique=True,
            sqlite_where=text("status = 'PENDING'"),
            postgresql_where=text("status = 'PENDING'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reason: Mapped[FlagReason] = mapped_column(
        SAEnum(FlagReason, native_enum=False, length=32),
        nullable=False,
    )
    comment: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[FlagStatus] = mapped_column(
        SAEnum(FlagStatus, native_enum=False, length=16),
        nullable=False,
        default=FlagStatus.PENDING,
        index=True,
    )
    decision: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    video: Mapped[Video] = relationship("Video")
    reporter: Mapped["User"] = relationship("User", foreign_keys=[reporter_id])  # noqa: F821


class CopyrightClaim(Base):
    """Rights-holder claim against a video."""

    __tablename__ = "copyright_claim"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    claimant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    claim_type: Mapped[ClaimType] = mapped_column(
        SAEnum(ClaimType, native_enum=False, length=16),
        nullable=False,
        default=ClaimType.COPYRIGHT,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ClaimStatus] = mapped_column(
        SAEnum(ClaimStatus, native_enum=False, length=16),
        nullable=False,
        default=ClaimStatus.PENDING,
        index=True,
    )
    decision: Mapped[str | None] = mapped_column(Text, nullable=True)
    counter_notice: Mapped[str | None] = mapped_column(Text, nullable=True)
    counter_noticed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    decided_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    decided_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    video: Mapped[Video] = relationship("Video")


class Strike(Base):
    """Penalty recorded against a creator."""

    __tablename__ = "strike"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("channel.id", ondelete="CASCADE"),
        nullable=True,
    )
    video_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="SET NULL"),
        nullable=True,
    )
    type: Mapped[StrikeType] = mapped_column(
        SAEnum(StrikeType, native_enum=False, length=32),
        nullable=False,
    )
    severity: Mapped[StrikeSeverity] = mapped_column(
        SAEnum(StrikeSeverity, native_enum=False, length=16),
        nullable=False,
        default=StrikeSeverity.STRIKE,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    issued_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])  # noqa: F821
    channel: Mapped["Channel"] = relationship("Channel")  # noqa: F821
