# src/vidshare/services/notifications.py
"""Notification tray helpers."""
from __future__ import annotations

from sqlalchemy.orm import Query, Session

from vidshare.core.errors import NotFoundError, ValidationFailedError
from vidshare.models import Notification, NotificationType

__all__ = ["notify", "user_notifications", "mark_read"]


def notify(
    db: Session,
    user_id: int,
    title: str,
    message: str,
    *,
    type: NotificationType = NotificationType.SYSTEM,
    video_id: int | None = None,
    channel_id: int | None = None,
) -> Notification:
    """Queue a notification in the caller's transaction without committing."""
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        video_id=video_id,
        channel_id=channel_id,
    )
    db.add(notification)
    return notification


def user_notifications(db: Session, user_id: int, *, unread_only: bool = False) -> Query:
    """Query a user's notifications, newest first."""
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc())


def mark_read(db: Session, user_id: int, ids: list[int] | None, mark_all: bool) -> int:
    """Mark notifications as read and return how many changed.

    Raises:
        ValidationFailedError: If neither ``ids`` nor ``mark_all`` is given.
        NotFoundError: If a single requested id does not belong to the user.
    """
    if not mark_all and not ids:
        raise ValidationFailedError("Notification ids or all=true is required")
    query = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.read.is_(False),
    )
    if not mark_all:
        owned = (
            db.query(Notification.id)
            .filter(Notification.user_id == user_id, Notification.id.in_(ids))
            .count()
        )
        if owned == 0:
            raise NotFoundError("Notification not found")
        query = query.filter(Notification.id.in_(ids))
    changed = query.update({Notification.read: True}, synchronize_session=False)
    db.commit()
    return changed
