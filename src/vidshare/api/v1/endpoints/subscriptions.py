# src/vidshare/api/v1/endpoints/subscriptions.py
"""Channel subscription endpoints."""

from fastapi import APIRouter, Query

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.models import Subscription
from vidshare.schemas.common import Page
from vidshare.schemas.engagement import (
    SubscriptionRequest,
    SubscriptionResponse,
    SubscriptionToggleResult,
    SubscriptionUpdate,
)
from vidshare.services import catalog, engagement
from vidshare.services.listing import paginate

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("", response_model=Page[SubscriptionResponse])
async def list_subscriptions(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
) -> dict:
    """Return the channels the caller follows."""
    return paginate(engagement.user_subscriptions(db, current_user.id), page, limit)


@router.post("", response_model=SubscriptionToggleResult)
async def toggle_subscription(
    payload: SubscriptionRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SubscriptionToggleResult:
    """Subscribe to a channel, or unsubscribe if already subscribed."""
    channel = catalog.get_channel(db, payload.channel_id)
    subscribed = engagement.toggle_subscription(db, current_user, channel)
    return SubscriptionToggleResult(
        subscribed=subscribed,
        subscriber_count=channel.subscriber_count,
    )


@router.patch("", response_model=SubscriptionResponse)
async def update_subscription(
    payload: SubscriptionUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Subscription:
    """Change the notification level for a subscription."""
    return engagement.set_notification_level(
        db, current_user, payload.channel_id, payload.notification_level
    )
