# src/vidshare/services/engagement.py
"""Engagement ledgers and the counters derived from them.

Every ledger write here commits in the same transaction as the matching
counter change on the target row.
"""
from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from vidshare.core.errors import ConflictError, NotFoundError, ValidationFailedError
from vidshare.db.session import atomic
from vidshare.db.time import utcnow
from vidshare.models import (
    Channel,
    NotificationLevel,
    NotificationType,
    Subscription,
    User,
    Video,
    VideoVote,
    VoteKind,
    WatchHistory,
    WatchLater,
)
from vidshare.services.counters import adjust_counters
from vidshare.services.notifications import notify
from vidshare.services.view_dedupe import ViewDedupeService

__all__ = [
    "toggle_vote",
    "current_vote",
    "record_view",
    "toggle_subscription",
    "set_notification_level",
    "user_subscriptions",
    "add_watch_later",
    "remove_watch_later",
    "clear_watch_later",
    "watch_later_entries",
    "watch_history_entries",
    "clear_watch_history",
]

logger = logging.getLogger(__name__)

VoteAction = Literal["created", "removed", "updated"]

_COUNTER_FOR_KIND = {
    VoteKind.LIKE: "like_count",
    VoteKind.DISLIKE: "dislike_count",
}


# --- Votes -----------------------------------------------------------------------
def toggle_vote(db: Session, user: User, video: Video, kind: VoteKind) -> VoteAction:
    """Apply a like/dislike toggle for ``user`` on ``video``.

    No prior vote creates one, a vote of the same kind is withdrawn, and a vote
    of the other kind is switched. The ``video`` instance is refreshed with the
    new counts before returning.
    """
    try:
        action = _apply_vote(db, user.id, video.id, kind)
    except IntegrityError:
        # A concurrent request inserted the first vote; re-read and toggle against it.
        logger.info("Vote race on video %s for user %s, retrying", video.id, user.id)
        action = _apply_vote(db, user.id, video.id, kind)
    db.refresh(video)
    return action


def _apply_vote(db: Session, user_id: int, video_id: int, kind: VoteKind) -> VoteAction:
    with atomic(db):
        existing = (
            db.query(VideoVote)
            .filter(VideoVote.user_id == user_id, VideoVote.video_id == video_id)
            .with_for_update()
            .first()
        )
        if existing is None:
            db.add(VideoVote(user_id=user_id, video_id=video_id, kind=kind))
            db.flush()
            adjust_counters(db, Video, video_id, **{_COUNTER_FOR_KIND[kind]: 1})
            return "created"
        if existing.kind == kind:
            db.delete(existing)
            adjust_counters(db, Video, video_id, **{_COUNTER_FOR_KIND[kind]: -1})
            return "removed"
        previous = existing.kind
        existing.kind = kind
        adjust_counters(
            db,
            Video,
            video_id,
            **{_COUNTER_FOR_KIND[previous]: -1, _COUNTER_FOR_KIND[kind]: 1},
        )
        return "updated"


def current_vote(db: Session, user: User, video: Video) -> VoteKind | None:
    """Return the kind of ``user``'s vote on ``video``, if any."""
    vote = (
        db.query(VideoVote)
        .filter(VideoVote.user_id == user.id, VideoVote.video_id == video.id)
        .first()
    )
    return vote.kind if vote else None


# --- Views -----------------------------------------------------------------------
def record_view(
    db: Session,
    video: Video,
    viewer_key: str,
    dedupe: ViewDedupeService,
    user: User | None = None,
) -> bool:
    """Count a view unless ``viewer_key`` was already counted for ``video``.

    A counted view bumps the video's ``view_count`` and its channel's
    ``total_views`` together; signed-in viewers also get a watch-history row.

    Returns:
        True if the view was counted, False if it was a duplicate.
    """
    if not dedupe.claim(viewer_key, video.id):
        return False
    try:
        with atomic(db):
            adjust_counters(db, Video, video.id, view_count=1)
            adjust_counters(db, Channel, video.channel_id, total_views=1)
            if user is not None:
                _touch_history(db, user.id, video.id)
    except SQLAlchemyError:
        dedupe.release(viewer_key, video.id)
        raise
    db.refresh(video)
    return True


def _touch_history(db: Session, user_id: int, video_id: int) -> None:
    entry = (
        db.query(WatchHistory)
        .filter(WatchHistory.user_id == user_id, WatchHistory.video_id == video_id)
        .first()
    )
    if entry is None:
        db.add(WatchHistory(user_id=user_id, video_id=video_id))
    else:
        entry.watched_at = utcnow()


def watch_history_entries(db: Session, user_id: int) -> Query:
    """Query a user's watch history, most recent first."""
    return (
        db.query(WatchHistory)
        .filter(WatchHistory.user_id == user_id)
        .order_by(WatchHistory.watched_at.desc(), WatchHistory.id.desc())
    )


def clear_watch_history(db: Session, user_id: int, video_id: int | None = None) -> int:
    """Delete one history entry, or all of them when ``video_id`` is None."""
    query = db.query(WatchHistory).filter(WatchHistory.user_id == user_id)
    if video_id is not None:
        query = query.filter(WatchHistory.video_id == video_id)
    removed = query.delete(synchronize_session=False)
    db.commit()
    return removed


# --- Subscriptions -----------------------------------------------------------------
def toggle_subscription(db: Session, user: User, channel: Channel) -> bool:
    """Subscribe ``user`` to ``channel``, or unsubscribe if already subscribed.

    Returns:
        True when the user is subscribed after the call.

    Raises:
        ValidationFailedError: If the user owns the channel.
    """
    if channel.owner_id == user.id:
        raise ValidationFailedError("Cannot subscribe to your own channel")

    with atomic(db):
        existing = (
            db.query(Subscription)
            .filter(Subscription.user_id == user.id, Subscription.channel_id == channel.id)
            .with_for_update()
            .first()
        )
        if existing is not None:
            db.delete(existing)
            adjust_counters(db, Channel, channel.id, subscriber_count=-1)
            subscribed = False
        else:
            db.add(Subscription(user_id=user.id, channel_id=channel.id))
            adjust_counters(db, Channel, channel.id, subscriber_count=1)
            notify(
                db,
                channel.owner_id,
                "New subscriber",
                f"{user.name or 'Someone'} subscribed to your channel",
                type=NotificationType.SUBSCRIPTION,
                channel_id=channel.id,
            )
            subscribed = True
    db.refresh(channel)
    return subscribed


def set_notification_level(
    db: Session,
    user: User,
    channel_id: int,
    level: NotificationLevel,
) -> Subscription:
    """Change how a subscriber is notified about a channel."""
    subscription = (
        db.query(Subscription)
        .filter(Subscription.user_id == user.id, Subscription.channel_id == channel_id)
        .first()
    )
    if subscription is None:
        raise NotFoundError("Not subscribed to this channel")
    subscription.notification_level = level
    db.commit()
    db.refresh(subscription)
    return subscription


def user_subscriptions(db: Session, user_id: int) -> Query:
    """Query the channels a user follows, most recent first."""
    return (
        db.query(Subscription)
        .filter(Subscription.user_id == user_id)
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
    )


# --- Watch later -------------------------------------------------------------------
def add_watch_later(db: Session, user: User, video: Video) -> WatchLater:
    """Bookmark ``video`` for ``user``."""
    existing = (
        db.query(WatchLater)
        .filter(WatchLater.user_id == user.id, WatchLater.video_id == video.id)
        .first()
    )
    if existing is not None:
        raise ConflictError("Video already in watch later")
    entry = WatchLater(user_id=user.id, video_id=video.id)
    db.add(entry)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Video already in watch later") from err
    db.refresh(entry)
    return entry


def remove_watch_later(db: Session, user: User, video_id: int) -> None:
    """Remove one bookmark."""
    removed = (
        db.query(WatchLater)
        .filter(WatchLater.user_id == user.id, WatchLater.video_id == video_id)
        .delete(synchronize_session=False)
    )
    if not removed:
        raise NotFoundError("Video not in watch later")
    db.commit()


def clear_watch_later(db: Session, user: User) -> int:
    """Remove every bookmark and return how many were dropped."""
    removed = (
        db.query(WatchLater)
        .filter(WatchLater.user_id == user.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed


def watch_later_entries(db: Session, user_id: int) -> Query:
    """Query a user's bookmarks, most recent first."""
    return (
        db.query(WatchLater)
        .filter(WatchLater.user_id == user_id)
        .order_by(WatchLater.added_at.desc(), WatchLater.id.desc())
    )
