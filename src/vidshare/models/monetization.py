# src/vidshare/models/monetization.py
"""Revenue and payout ledger."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from vidshare.db.session import Base
from vidshare.db.time import utcnow


class TransactionType(str, Enum):
    """Ledger entry category."""

    AD_REVENUE = "AD_REVENUE"
    MEMBERSHIP = "MEMBERSHIP"
    SUPERCHAT = "SUPERCHAT"
    DONATION = "DONATION"
    PAYOUT = "PAYOUT"


class TransactionStatus(str, Enum):
    """Settlement state of a ledger entry."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


REVENUE_TYPES: tuple[TransactionType, ...] = (
    TransactionType.AD_REVENUE,
    TransactionType.MEMBERSHIP,
    TransactionType.SUPERCHAT,
    TransactionType.DONATION,
)


class Transaction(Base):
    """Single revenue or payout movement for a creator.

    Revenue rows carry positive amounts; payouts are recorded as negative
    amounts on the same ledger.
    """

    __tablename__ = "ledger_transaction"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("channel.id", ondelete="SET NULL"),
        nullable=True,
    )
    type: Mapped[TransactionType] = mapped_column(
        SAEnum(TransactionType, native_enum=False, length=16),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(TransactionStatus, native_enum=False, length=16),
        nullable=False,
        default=TransactionStatus.PENDING,
    )
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
