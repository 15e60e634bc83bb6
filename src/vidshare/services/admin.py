# src/vidshare/services/admin.py
"""Administrator actions on accounts, channels and videos, plus platform analytics."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from vidshare.core.errors import NotFoundError, ValidationFailedError
from vidshare.db.session import atomic
from vidshare.db.time import days_from_now, utcnow
from vidshare.models import (
    Channel,
    ChannelStatus,
    ClaimStatus,
    CopyrightClaim,
    Flag,
    FlagReason,
    FlagStatus,
    Notification,
    Playlist,
    PlaylistVideo,
    Role,
    Strike,
    StrikeSeverity,
    StrikeType,
    Transaction,
    TransactionStatus,
    User,
    UserStatus,
    Video,
    VideoVote,
    Visibility,
    WatchHistory,
    WatchLater,
)
from vidshare.schemas.admin import ChannelAdminAction, UserAdminAction, VideoAdminAction
from vidshare.services.audit import record_audit
from vidshare.services.counters import adjust_counters
from vidshare.services.listing import status_counts
from vidshare.services.moderation import ModerationService
from vidshare.services.notifications import notify

__all__ = [
    "apply_channel_action",
    "apply_video_action",
    "delete_video",
    "get_user",
    "user_detail",
    "apply_user_action",
    "analytics_overview",
]

logger = logging.getLogger(__name__)

_CHANNEL_AUDIT_ACTIONS = {
    "verify": "CHANNEL_VERIFIED",
    "unverify": "CHANNEL_UNVERIFIED",
    "suspend": "CHANNEL_SUSPENDED",
    "restore": "CHANNEL_RESTORED",
    "enable_monetization": "CHANNEL_MONETIZATION_ENABLED",
    "disable_monetization": "CHANNEL_MONETIZATION_DISABLED",
    "warn": "CHANNEL_WARNED",
}

_VIDEO_AUDIT_ACTIONS = {
    "remove": "VIDEO_REMOVED",
    "restore": "VIDEO_RESTORED",
    "age_restrict": "VIDEO_AGE_RESTRICTED",
    "remove_age_restriction": "VIDEO_AGE_RESTRICTION_REMOVED",
    "set_visibility": "VIDEO_VISIBILITY_CHANGED",
    "disable_comments": "VIDEO_COMMENTS_DISABLED",
    "enable_comments": "VIDEO_COMMENTS_ENABLED",
}


_USER_AUDIT_ACTIONS = {
    "suspend": "USER_SUSPENDED",
    "ban": "USER_BANNED",
    "warn": "USER_WARNED",
    "restore": "USER_RESTORED",
    "change_role": "USER_ROLE_CHANGED",
    "update_trust_score": "USER_TRUST_SCORE_CHANGED",
}

_VIDEO_OWNED_ROWS = (VideoVote, WatchHistory, WatchLater, Flag, CopyrightClaim)

# Trust lost for each admin warning.
_WARNING_TRUST_PENALTY = 10


def _user_snapshot(user: User) -> dict[str, Any]:
    return {"status": user.status.value, "role": user.role.value, "trust_score": user.trust_score}


def _channel_snapshot(channel: Channel) -> dict[str, Any]:
    return {
        "verified": channel.verified,
        "status": channel.status.value,
        "monetization_enabled": channel.monetization_enabled,
    }


def _video_snapshot(video: Video) -> dict[str, Any]:
    return {
        "visibility": video.visibility.value,
        "age_restricted": video.age_restricted,
        "comments_enabled": video.comments_enabled,
    }


def apply_channel_action(
    db: Session,
    admin: User,
    channel: Channel,
    request: ChannelAdminAction,
) -> Channel:
    """Apply one admin action to a channel and record it in the audit log."""
    before = _channel_snapshot(channel)
    action = request.action

    with atomic(db):
        if action == "verify":
            channel.verified = True
        elif action == "unverify":
            channel.verified = False
        elif action == "suspend":
            channel.status = ChannelStatus.SUSPENDED
            channel.suspended_by_strikes = False
            notify(
                db,
                channel.owner_id,
                "Channel Suspended",
                request.reason or "Your channel has been suspended for policy violations.",
                channel_id=channel.id,
            )
        elif action == "restore":
            channel.status = ChannelStatus.ACTIVE
            channel.suspended_by_strikes = False
        elif action == "enable_monetization":
            channel.monetization_enabled = True
        elif action == "disable_monetization":
            channel.monetization_enabled = False
            notify(
                db,
                channel.owner_id,
                "Monetization Disabled",
                request.reason or "Monetization has been disabled on your channel.",
                channel_id=channel.id,
            )
        elif action == "warn":
            notify(
                db,
                channel.owner_id,
                "Channel Warning",
                request.reason or "Your channel has received a warning for policy violations.",
                channel_id=channel.id,
            )

        record_audit(
            db,
            admin,
            _CHANNEL_AUDIT_ACTIONS[action],
            "Channel",
            channel.id,
            old_value=before,
            new_value=_channel_snapshot(channel),
            notes=request.notes or request.reason,
        )
    db.refresh(channel)
    return channel


def apply_video_action(
    db: Session,
    admin: User,
    video: Video,
    request: VideoAdminAction,
) -> Video:
    """Apply one admin action to a video and record it in the audit log.

    Raises:
        ValidationFailedError: If ``set_visibility`` is requested without a
            visibility.
    """
    action = request.action
    if action == "set_visibility" and request.visibility is None:
        raise ValidationFailedError("Visibility is required")

    before = _video_snapshot(video)
    owner_id = video.channel.owner_id

    with atomic(db):
        if action == "remove":
            video.visibility = Visibility.PRIVATE
            notify(
                db,
                owner_id,
                "Video Removed",
                request.reason or "Your video has been removed for policy violations.",
                video_id=video.id,
            )
            if request.apply_strike:
                ModerationService.issue_strike(
                    db,
                    admin,
                    video,
                    strike_type=StrikeType.COMMUNITY_GUIDELINES,
                    severity=StrikeSeverity.STRIKE,
                    reason=request.reason or "Video removed for policy violations",
                )
        elif action == "restore":
            video.visibility = Visibility.PUBLIC
        elif action == "age_restrict":
            video.age_restricted = True
            notify(
                db,
                owner_id,
                "Video Age-Restricted",
                request.reason or "Your video has been age-restricted.",
                video_id=video.id,
            )
        elif action == "remove_age_restriction":
            video.age_restricted = False
        elif action == "set_visibility":
            video.visibility = request.visibility
        elif action == "disable_comments":
            video.comments_enabled = False
        elif action == "enable_comments":
            video.comments_enabled = True

        record_audit(
            db,
            admin,
            _VIDEO_AUDIT_ACTIONS[action],
            "Video",
            video.id,
            old_value=before,
            new_value=_video_snapshot(video),
            notes=request.notes or request.reason,
        )
    db.refresh(video)
    return video


def _detach_video(db: Session, video_id: int) -> None:
    """Remove or unlink every row that points at ``video_id``.

    Playlists lose the entry, close the gap in their ordering and have
    ``video_count`` decremented.
    """
    entries = db.query(PlaylistVideo).filter(PlaylistVideo.video_id == video_id).all()
    for entry in entries:
        playlist_id, position = entry.playlist_id, entry.position
        db.delete(entry)
        db.flush()
        db.query(PlaylistVideo).filter(
            PlaylistVideo.playlist_id == playlist_id,
            PlaylistVideo.position > position,
        ).update(
            {PlaylistVideo.position: PlaylistVideo.position - 1},
            synchronize_session=False,
        )
        adjust_counters(db, Playlist, playlist_id, video_count=-1)

    for model in _VIDEO_OWNED_ROWS:
        db.query(model).filter(model.video_id == video_id).delete(synchronize_session=False)
    for model in (Strike, Notification):
        db.query(model).filter(model.video_id == video_id).update(
            {model.video_id: None},
            synchronize_session=False,
        )


def delete_video(db: Session, admin: User, video: Video, reason: str | None = None) -> None:
    """Permanently delete a video and its dependent rows, notifying its owner."""
    video_id = video.id
    with atomic(db):
        _detach_video(db, video_id)
        notify(
            db,
            video.channel.owner_id,
            "Video Deleted",
            reason or f'Your video "{video.title}" has been deleted by an administrator.',
        )
        record_audit(
            db,
            admin,
            "VIDEO_DELETED",
            "Video",
            video_id,
            old_value={"title": video.title, **_video_snapshot(video)},
            notes=reason,
        )
        db.delete(video)
    logger.warning("Admin %s deleted video %s", admin.id, video_id)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def user_detail(db: Session, user: User) -> dict[str, Any]:
    """Return ``user`` with its channels, active strikes and flag count."""
    now = utcnow()
    active_strikes = (
        db.query(Strike)
        .filter(
            Strike.user_id == user.id,
            Strike.active.is_(True),
            (Strike.expires_at.is_(None)) | (Strike.expires_at > now),
        )
        .order_by(Strike.created_at.desc())
        .all()
    )
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "username": user.username,
        "role": user.role,
        "status": user.status,
        "trust_score": user.trust_score,
        "created_at": user.created_at,
        "channels": db.query(Channel).filter(Channel.owner_id == user.id).all(),
        "active_strikes": active_strikes,
        "flag_count": db.query(Flag).filter(Flag.reporter_id == user.id).count(),
    }


def apply_user_action(
    db: Session,
    admin: User,
    user: User,
    request: UserAdminAction,
) -> User:
    """Suspend, ban, warn, restore or re-grade an account and audit the change.

    Raises:
        ValidationFailedError: If an admin targets themself with ``suspend`` or
            ``ban``, or a required role or trust score is missing.
    """
    action = request.action
    if user.id == admin.id and action in ("suspend", "ban"):
        raise ValidationFailedError("Cannot suspend or ban yourself")
    if action == "change_role" and request.role is None:
        raise ValidationFailedError("Role is required")
    if action == "update_trust_score" and request.trust_score is None:
        raise ValidationFailedError("Trust score is required")

    before = _user_snapshot(user)
    with atomic(db):
        if action == "suspend":
            user.status = UserStatus.SUSPENDED
        elif action == "ban":
            user.status = UserStatus.BANNED
        elif action == "restore":
            user.status = UserStatus.ACTIVE
        elif action == "warn":
            notify(
                db,
                user.id,
                "Warning from Administration",
                request.reason
                or "You have received a warning for violating community guidelines.",
            )
            user.trust_score = max(0, user.trust_score - _WARNING_TRUST_PENALTY)
        elif action == "change_role":
            user.role = request.role
        elif action == "update_trust_score":
            user.trust_score = request.trust_score

        record_audit(
            db,
            admin,
            _USER_AUDIT_ACTIONS[action],
            "User",
            user.id,
            old_value=before,
            new_value=_user_snapshot(user),
            notes=request.notes or request.reason,
        )
    db.refresh(user)
    logger.info("Admin %s applied %s to user %s", admin.id, action, user.id)
    return user


def analytics_overview(db: Session, period_days: int = 30) -> dict[str, Any]:
    """Return platform totals plus activity within the last ``period_days``."""
    since = days_from_now(-period_days)
    now = utcnow()

    video_sums = db.query(
        func.coalesce(func.sum(Video.view_count), 0),
        func.coalesce(func.sum(Video.like_count), 0),
    ).one()
    revenue = (
        db.query(func.coalesce(func.sum(Transaction.amount), 0))
        .filter(
            Transaction.status == TransactionStatus.COMPLETED,
            Transaction.created_at >= since,
            Transaction.amount > 0,
        )
        .scalar()
    )

    return {
        "period_days": period_days,
        "total_users": db.query(User).count(),
        "total_channels": db.query(Channel).count(),
        "total_videos": db.query(Video).count(),
        "new_users": db.query(User).filter(User.created_at >= since).count(),
        "new_channels": db.query(Channel).filter(Channel.created_at >= since).count(),
        "new_videos": db.query(Video).filter(Video.created_at >= since).count(),
        "pending_flags": db.query(Flag).filter(Flag.status == FlagStatus.PENDING).count(),
        "pending_claims": db.query(CopyrightClaim)
        .filter(CopyrightClaim.status == ClaimStatus.PENDING)
        .count(),
        "active_strikes": db.query(Strike)
        .filter(Strike.active.is_(True), (Strike.expires_at.is_(None)) | (Strike.expires_at > now))
        .count(),
        "total_views": int(video_sums[0]),
        "total_likes": int(video_sums[1]),
        "verified_channels": db.query(Channel).filter(Channel.verified.is_(True)).count(),
        "monetized_channels": db.query(Channel)
        .filter(Channel.monetization_enabled.is_(True))
        .count(),
        "users_by_role": status_counts(db, User.role, Role),
        "videos_by_visibility": status_counts(db, Video.visibility, Visibility),
        "flags_by_status": status_counts(db, Flag.status, FlagStatus),
        "flags_by_reason": status_counts(db, Flag.reason, FlagReason),
        "claims_by_status": status_counts(db, CopyrightClaim.status, ClaimStatus),
        "revenue_in_period": float(revenue or 0),
    }
