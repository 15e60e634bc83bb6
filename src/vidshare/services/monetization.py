# src/vidshare/services/monetization.py
"""Creator earnings, payouts and monetization eligibility."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from vidshare.core.errors import PermissionDeniedError, ValidationFailedError
from vidshare.core.settings import settings
from vidshare.db.session import atomic
from vidshare.db.time import utcnow
from vidshare.models import (
    REVENUE_TYPES,
    Channel,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
)

__all__ = [
    "available_balance",
    "request_payout",
    "payout_history",
    "monetization_summary",
    "set_monetization",
]

logger = logging.getLogger(__name__)

_ZERO = Decimal("0.00")


def _sum(db: Session, *criteria) -> Decimal:
    total = db.query(func.coalesce(func.sum(Transaction.amount), 0)).filter(*criteria).scalar()
    return Decimal(str(total or 0)).quantize(_ZERO)


def _completed_revenue(db: Session, user_id: int, *criteria) -> Decimal:
    return _sum(
        db,
        Transaction.user_id == user_id,
        Transaction.status == TransactionStatus.COMPLETED,
        Transaction.type.in_(REVENUE_TYPES),
        *criteria,
    )


def available_balance(db: Session, user_id: int) -> Decimal:
    """Completed revenue minus every payout that has not failed.

    Payout rows carry negative amounts, so their magnitude is subtracted.
    Pending payouts are included so that queued requests cannot overdraw.
    """
    earned = _completed_revenue(db, user_id)
    paid_out = _sum(
        db,
        Transaction.user_id == user_id,
        Transaction.type == TransactionType.PAYOUT,
        Transaction.status != TransactionStatus.FAILED,
    )
    return earned - abs(paid_out)


def _format_minimum(amount: float) -> str:
    return f"${amount:,.0f}" if float(amount).is_integer() else f"${amount:,.2f}"


def request_payout(
    db: Session,
    user: User,
    amount: Decimal,
    payment_method: str = "bank_transfer",
) -> Transaction:
    """Queue a payout for ``user``.

    Checks run in order: positive amount, platform minimum, then available
    balance, so a sub-minimum request is refused even when the balance is
    short too.

    Raises:
        ValidationFailedError: With "Invalid amount", "Minimum payout is $N" or
            "Insufficient balance".
    """
    if amount <= 0:
        raise ValidationFailedError("Invalid amount")
    minimum = Decimal(str(settings.payout_minimum))
    if amount < minimum:
        raise ValidationFailedError(
            f"Minimum payout is {_format_minimum(settings.payout_minimum)}"
        )

    with atomic(db):
        # Row lock serializes concurrent payout requests for this user.
        db.query(User).filter(User.id == user.id).with_for_update().one()
        balance = available_balance(db, user.id)
        if amount > balance:
            raise ValidationFailedError("Insufficient balance")
        payout = Transaction(
            user_id=user.id,
            type=TransactionType.PAYOUT,
            amount=-amount,
            status=TransactionStatus.PENDING,
            payment_method=payment_method,
        )
        db.add(payout)
    db.refresh(payout)
    logger.info("User %s requested payout %s of %s", user.id, payout.id, amount)
    return payout


def payout_history(db: Session, user_id: int) -> list[Transaction]:
    """Return the user's payouts, newest first."""
    return (
        db.query(Transaction)
        .filter(Transaction.user_id == user_id, Transaction.type == TransactionType.PAYOUT)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .all()
    )


def monetization_summary(db: Session, user: User) -> dict[str, Any]:
    """Aggregate the caller's channels and earnings for the dashboard."""
    now = utcnow()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    min_subscribers = settings.monetization_min_subscribers

    channels = (
        db.query(Channel).filter(Channel.owner_id == user.id).order_by(Channel.id).all()
    )

    revenue_by_type: dict[str, Decimal] = {kind.value: _ZERO for kind in REVENUE_TYPES}
    rows = (
        db.query(Transaction.type, func.sum(Transaction.amount))
        .filter(
            Transaction.user_id == user.id,
            Transaction.status == TransactionStatus.COMPLETED,
            Transaction.type.in_(REVENUE_TYPES),
        )
        .group_by(Transaction.type)
        .all()
    )
    for kind, total in rows:
        revenue_by_type[kind.value] = Decimal(str(total or 0)).quantize(_ZERO)

    pending = _sum(
        db,
        Transaction.user_id == user.id,
        Transaction.type == TransactionType.PAYOUT,
        Transaction.status == TransactionStatus.PENDING,
    )
    recent = (
        db.query(Transaction)
        .filter(Transaction.user_id == user.id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .limit(10)
        .all()
    )

    return {
        "channels": [
            {
                "id": channel.id,
                "name": channel.name,
                "subscriber_count": channel.subscriber_count,
                "monetization_enabled": channel.monetization_enabled,
                "eligible": channel.subscriber_count >= min_subscribers,
            }
            for channel in channels
        ],
        "total_earnings": _completed_revenue(db, user.id),
        "this_month_earnings": _completed_revenue(
            db, user.id, Transaction.created_at >= month_start
        ),
        "pending_payouts": abs(pending),
        "available_balance": available_balance(db, user.id),
        "revenue_by_type": revenue_by_type,
        "recent_transactions": recent,
    }


def set_monetization(db: Session, user: User, channel_id: int, enabled: bool) -> Channel:
    """Switch monetization for one of the caller's channels.

    Raises:
        PermissionDeniedError: If the channel is missing or owned by someone else.
        ValidationFailedError: If enabling a channel below the subscriber bar.
    """
    channel = db.get(Channel, channel_id)
    if channel is None or channel.owner_id != user.id:
        raise PermissionDeniedError("Channel not found or you don't have permission")
    min_subscribers = settings.monetization_min_subscribers
    if enabled and channel.subscriber_count < min_subscribers:
        raise ValidationFailedError(
            f"You need at least {min_subscribers:,} subscribers to enable monetization"
        )
    channel.monetization_enabled = enabled
    db.commit()
    db.refresh(channel)
    return channel
