# src/vidshare/schemas/monetization.py
"""Monetization and payout schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from vidshare.models.monetization import TransactionStatus, TransactionType


class PayoutRequest(BaseModel):
    """Schema for requesting a payout of available earnings."""

    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    payment_method: str = Field("bank_transfer", min_length=1, max_length=50)


class TransactionResponse(BaseModel):
    """A ledger entry."""

    id: int
    channel_id: int | None
    type: TransactionType
    amount: Decimal
    currency: str
    status: TransactionStatus
    payment_method: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PayoutHistory(BaseModel):
    """Payout requests plus the caller's current balance."""

    payouts: list[TransactionResponse]
    available_balance: Decimal


class ChannelEarnings(BaseModel):
    """Monetization standing of one of the caller's channels."""

    id: int
    name: str
    subscriber_count: int
    monetization_enabled: bool
    eligible: bool


class MonetizationSummary(BaseModel):
    """Overview of the caller's earnings across channels."""

    channels: list[ChannelEarnings]
    total_earnings: Decimal
    this_month_earnings: Decimal
    pending_payouts: Decimal
    available_balance: Decimal
    revenue_by_type: dict[str, Decimal]
    recent_transactions: list[TransactionResponse]


class MonetizationToggle(BaseModel):
    """Schema for switching monetization on or off for a channel."""

    channel_id: int
    enabled: bool
