# src/vidshare/models/user.py
"""SQLAlchemy models for accounts and the per-user block list."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.db.session import Base
from vidshare.db.time import utcnow


class Role(str, Enum):
    """Account roles; ADMIN unlocks the admin API."""

    USER = "USER"
    CREATOR = "CREATOR"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Standing of an account; only ACTIVE accounts may sign in."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class User(Base):
    """Registered account."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str | None] = mapped_column(String(30), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(UserStatus, native_enum=False, length=16),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    # Reporter reputation, nudged upward when a flag leads to action.
    trust_score: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    channels: Mapped[list["Channel"]] = relationship(  # noqa: F821
        "Channel",
        back_populates="owner",
    )

    @property
    def is_admin(self) -> bool:
        """Return True for administrator accounts."""
        return self.role == Role.ADMIN


class BlockedUser(Base):
    """One user hiding another; rows are owned by the blocker."""

    __tablename__ = "blocked_user"
    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_id", name="uq_blocked_user_pair"),
        CheckConstraint("blocker_id <> blocked_id", name="ck_blocked_user_not_self"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    blocker_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    blocked_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    blocked: Mapped[User] = relationship("User", foreign_keys=[blocked_id])
