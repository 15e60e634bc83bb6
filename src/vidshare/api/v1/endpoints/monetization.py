# src/vidshare/api/v1/endpoints/monetization.py
"""Creator monetization and payout endpoints."""

from fastapi import APIRouter, status

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.models import Channel, Transaction
from vidshare.schemas.monetization import (
    MonetizationSummary,
    MonetizationToggle,
    PayoutHistory,
    PayoutRequest,
    TransactionResponse,
)
from vidshare.schemas.video import ChannelResponse
from vidshare.services import monetization

router = APIRouter(prefix="/monetization", tags=["monetization"])


@router.get("", response_model=MonetizationSummary)
async def get_summary(current_user: CurrentUserDep, db: SessionDep) -> dict:
    """Return the caller's earnings overview."""
    return monetization.monetization_summary(db, current_user)


@router.post("", response_model=ChannelResponse)
async def toggle_monetization(
    payload: MonetizationToggle,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Channel:
    """Enable or disable monetization on one of the caller's channels."""
    return monetization.set_monetization(db, current_user, payload.channel_id, payload.enabled)


@router.get("/payout", response_model=PayoutHistory)
async def list_payouts(current_user: CurrentUserDep, db: SessionDep) -> PayoutHistory:
    """Return the caller's payout requests and available balance."""
    return PayoutHistory(
        payouts=[
            TransactionResponse.model_validate(item)
            for item in monetization.payout_history(db, current_user.id)
        ],
        available_balance=monetization.available_balance(db, current_user.id),
    )


@router.post("/payout", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def request_payout(
    payload: PayoutRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Transaction:
    """Request a payout of available earnings."""
    return monetization.request_payout(
        db, current_user, payload.amount, payload.payment_method
    )
