# src/vidshare/api/v1/endpoints/notifications.py
"""Notification tray endpoints."""

from fastapi import APIRouter, Query

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.schemas.common import MessageResponse, Page
from vidshare.schemas.engagement import NotificationMarkRead, NotificationResponse
from vidshare.services import notifications
from vidshare.services.listing import paginate

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    unread_only: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """Return the caller's notifications, newest first."""
    query = notifications.user_notifications(db, current_user.id, unread_only=unread_only)
    return paginate(query, page, limit)


@router.patch("", response_model=MessageResponse)
async def mark_notifications_read(
    payload: NotificationMarkRead,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Mark the given notifications, or all of them, as read."""
    changed = notifications.mark_read(db, current_user.id, payload.ids, payload.all)
    return MessageResponse(message=f"{changed} notification(s) marked as read")
