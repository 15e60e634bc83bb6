# src/vidshare/api/v1/endpoints/admin.py
"""Admin dashboard endpoints: moderation queues, catalog control and audit."""

from fastapi import APIRouter, Query, status

from vidshare.api.v1.dependencies import AdminUserDep, SessionDep
from vidshare.models import (
    AuditLog,
    Channel,
    ChannelStatus,
    ClaimStatus,
    CopyrightClaim,
    Flag,
    FlagReason,
    FlagStatus,
    Role,
    Strike,
    StrikeSeverity,
    StrikeType,
    User,
    UserStatus,
    Video,
    VideoType,
    Visibility,
)
from vidshare.schemas.admin import (
    AnalyticsOverview,
    AuditLogResponse,
    ChannelAdminAction,
    UserAdminAction,
    UserAdminDetail,
    UserAdminResponse,
    VideoAdminAction,
)
from vidshare.schemas.common import MessageResponse, Page, StatusPage
from vidshare.schemas.moderation import (
    ClaimDecision,
    ClaimDetailResponse,
    ClaimResponse,
    FlagDecision,
    FlagDetailResponse,
    FlagResponse,
    StrikeCreate,
    StrikeDetailResponse,
    StrikeResponse,
    StrikeUpdate,
)
from vidshare.schemas.video import ChannelResponse, VideoResponse
from vidshare.services import admin as admin_service
from vidshare.services import audit, catalog
from vidshare.services.listing import apply_sort, paginate, status_counts
from vidshare.services.moderation import ModerationService

router = APIRouter(prefix="/admin", tags=["admin"])

_FLAG_SORT = {
    "created_at": Flag.created_at,
    "status": Flag.status,
    "reason": Flag.reason,
    "reviewed_at": Flag.reviewed_at,
}
_CLAIM_SORT = {
    "created_at": CopyrightClaim.created_at,
    "status": CopyrightClaim.status,
    "decided_at": CopyrightClaim.decided_at,
}
_CHANNEL_SORT = {
    "created_at": Channel.created_at,
    "name": Channel.name,
    "subscriber_count": Channel.subscriber_count,
    "total_views": Channel.total_views,
}
_VIDEO_SORT = {
    "created_at": Video.created_at,
    "title": Video.title,
    "view_count": Video.view_count,
    "like_count": Video.like_count,
}
_STRIKE_SORT = {
    "created_at": Strike.created_at,
    "expires_at": Strike.expires_at,
    "severity": Strike.severity,
    "type": Strike.type,
}
_USER_SORT = {
    "created_at": User.created_at,
    "name": User.name,
    "email": User.email,
    "trust_score": User.trust_score,
}
_AUDIT_SORT = {
    "created_at": AuditLog.created_at,
    "action": AuditLog.action,
}


# --- Flags -------------------------------------------------------------------------
@router.get("/flags", response_model=StatusPage[FlagResponse])
async def list_flags(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: FlagStatus | None = Query(None, alias="status"),
    reason: FlagReason | None = None,
    video_id: int | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List flags with counts for every status."""
    query = db.query(Flag)
    if status_filter is not None:
        query = query.filter(Flag.status == status_filter)
    if reason is not None:
        query = query.filter(Flag.reason == reason)
    if video_id is not None:
        query = query.filter(Flag.video_id == video_id)
    query = apply_sort(query, sort_by, sort_order, _FLAG_SORT)
    result = paginate(query, page, limit)
    result["status_counts"] = status_counts(db, Flag.status, FlagStatus)
    return result


@router.get("/flags/{flag_id}", response_model=FlagDetailResponse)
async def get_flag(flag_id: int, _admin: AdminUserDep, db: SessionDep) -> Flag:
    """Return a flag with its video and reporter."""
    return ModerationService.get_flag(db, flag_id)


@router.patch("/flags/{flag_id}", response_model=FlagResponse)
async def resolve_flag(
    flag_id: int,
    ruling: FlagDecision,
    admin: AdminUserDep,
    db: SessionDep,
) -> Flag:
    """Decide a pending flag."""
    flag = ModerationService.get_flag(db, flag_id)
    return ModerationService.resolve_flag(db, admin, flag, ruling)


# --- Copyright claims --------------------------------------------------------------
@router.get("/copyright/claims", response_model=StatusPage[ClaimResponse])
async def list_claims(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: ClaimStatus | None = Query(None, alias="status"),
    video_id: int | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List copyright claims with counts for every status."""
    query = db.query(CopyrightClaim)
    if status_filter is not None:
        query = query.filter(CopyrightClaim.status == status_filter)
    if video_id is not None:
        query = query.filter(CopyrightClaim.video_id == video_id)
    query = apply_sort(query, sort_by, sort_order, _CLAIM_SORT)
    result = paginate(query, page, limit)
    result["status_counts"] = status_counts(db, CopyrightClaim.status, ClaimStatus)
    return result


@router.get("/copyright/claims/{claim_id}", response_model=ClaimDetailResponse)
async def get_claim(claim_id: int, _admin: AdminUserDep, db: SessionDep) -> CopyrightClaim:
    """Return a claim with its video."""
    return ModerationService.get_claim(db, claim_id)


@router.patch("/copyright/claims/{claim_id}", response_model=ClaimResponse)
async def decide_claim(
    claim_id: int,
    ruling: ClaimDecision,
    admin: AdminUserDep,
    db: SessionDep,
) -> CopyrightClaim:
    """Uphold, partially uphold or reject a claim."""
    claim = ModerationService.get_claim(db, claim_id)
    return ModerationService.decide_claim(db, admin, claim, ruling)


# --- Strikes -----------------------------------------------------------------------
@router.get("/strikes", response_model=StatusPage[StrikeResponse])
async def list_strikes(
    _admin: AdminUserDep,
    db: SessionDep,
    user_id: int | None = None,
    channel_id: int | None = None,
    strike_type: StrikeType | None = Query(None, alias="type"),
    severity: StrikeSeverity | None = None,
    active: bool | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List strikes; ``status_counts`` tallies active strikes by type."""
    query = ModerationService.strikes(
        db,
        user_id=user_id,
        channel_id=channel_id,
        strike_type=strike_type,
        severity=severity,
        active=active,
    )
    query = apply_sort(query, sort_by, sort_order, _STRIKE_SORT)
    result = paginate(query, page, limit)
    result["status_counts"] = status_counts(db, Strike.type, StrikeType, Strike.active.is_(True))
    return result


@router.post("/strikes", response_model=StrikeResponse, status_code=status.HTTP_201_CREATED)
async def create_strike(payload: StrikeCreate, admin: AdminUserDep, db: SessionDep) -> Strike:
    """Issue a strike against an account."""
    return ModerationService.create_strike(db, admin, payload)


@router.get("/strikes/{strike_id}", response_model=StrikeDetailResponse)
async def get_strike(strike_id: int, _admin: AdminUserDep, db: SessionDep) -> Strike:
    return ModerationService.get_strike(db, strike_id)


@router.patch("/strikes/{strike_id}", response_model=StrikeResponse)
async def update_strike(
    strike_id: int,
    payload: StrikeUpdate,
    admin: AdminUserDep,
    db: SessionDep,
) -> Strike:
    """Remove, expire or re-grade a strike."""
    strike = ModerationService.get_strike(db, strike_id)
    return ModerationService.update_strike(db, admin, strike, payload)


@router.delete("/strikes/{strike_id}", response_model=MessageResponse)
async def delete_strike(strike_id: int, admin: AdminUserDep, db: SessionDep) -> MessageResponse:
    """Delete a strike permanently."""
    strike = ModerationService.get_strike(db, strike_id)
    ModerationService.delete_strike(db, admin, strike)
    return MessageResponse(message="Strike deleted")


# --- Users -------------------------------------------------------------------------
@router.get("/users", response_model=StatusPage[UserAdminResponse])
async def list_users(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: UserStatus | None = Query(None, alias="status"),
    role: Role | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List accounts; ``status_counts`` tallies every account by status."""
    query = db.query(User)
    if status_filter is not None:
        query = query.filter(User.status == status_filter)
    if role is not None:
        query = query.filter(User.role == role)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            User.email.ilike(pattern) | User.name.ilike(pattern) | User.username.ilike(pattern)
        )
    query = apply_sort(query, sort_by, sort_order, _USER_SORT)
    result = paginate(query, page, limit)
    result["status_counts"] = status_counts(db, User.status, UserStatus)
    return result


@router.get("/users/{user_id}", response_model=UserAdminDetail)
async def get_user(user_id: int, _admin: AdminUserDep, db: SessionDep) -> dict:
    """Return an account with its channels, active strikes and flag count."""
    user = admin_service.get_user(db, user_id)
    return admin_service.user_detail(db, user)


@router.patch("/users/{user_id}", response_model=UserAdminResponse)
async def update_user(
    user_id: int,
    request: UserAdminAction,
    admin: AdminUserDep,
    db: SessionDep,
) -> User:
    """Suspend, ban, warn, restore, change role or set trust score on an account."""
    user = admin_service.get_user(db, user_id)
    return admin_service.apply_user_action(db, admin, user, request)


# --- Channels ----------------------------------------------------------------------
@router.get("/channels", response_model=Page[ChannelResponse])
async def list_channels(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: ChannelStatus | None = Query(None, alias="status"),
    verified: bool | None = None,
    monetization_enabled: bool | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List channels with filters."""
    query = db.query(Channel)
    if status_filter is not None:
        query = query.filter(Channel.status == status_filter)
    if verified is not None:
        query = query.filter(Channel.verified.is_(verified))
    if monetization_enabled is not None:
        query = query.filter(Channel.monetization_enabled.is_(monetization_enabled))
    if search:
        pattern = f"%{search}%"
        query = query.filter(Channel.name.ilike(pattern) | Channel.handle.ilike(pattern))
    query = apply_sort(query, sort_by, sort_order, _CHANNEL_SORT)
    return paginate(query, page, limit)


@router.get("/channels/{channel_id}", response_model=ChannelResponse)
async def get_channel(channel_id: int, _admin: AdminUserDep, db: SessionDep) -> Channel:
    """Return one channel."""
    return catalog.get_channel(db, channel_id)


@router.patch("/channels/{channel_id}", response_model=ChannelResponse)
async def update_channel(
    channel_id: int,
    request: ChannelAdminAction,
    admin: AdminUserDep,
    db: SessionDep,
) -> Channel:
    """Verify, suspend, restore, warn or change monetization on a channel."""
    channel = catalog.get_channel(db, channel_id)
    return admin_service.apply_channel_action(db, admin, channel, request)


# --- Videos ------------------------------------------------------------------------
@router.get("/videos", response_model=Page[VideoResponse])
async def list_videos(
    _admin: AdminUserDep,
    db: SessionDep,
    visibility: Visibility | None = None,
    video_type: VideoType | None = Query(None, alias="type"),
    age_restricted: bool | None = None,
    channel_id: int | None = None,
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List every video regardless of visibility."""
    query = db.query(Video)
    if visibility is not None:
        query = query.filter(Video.visibility == visibility)
    if video_type is not None:
        query = query.filter(Video.video_type == video_type)
    if age_restricted is not None:
        query = query.filter(Video.age_restricted.is_(age_restricted))
    if channel_id is not None:
        query = query.filter(Video.channel_id == channel_id)
    if search:
        query = query.filter(Video.title.ilike(f"%{search}%"))
    query = apply_sort(query, sort_by, sort_order, _VIDEO_SORT)
    return paginate(query, page, limit)


@router.get("/videos/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, _admin: AdminUserDep, db: SessionDep) -> Video:
    """Return one video regardless of visibility."""
    return catalog.get_video(db, video_id)


@router.patch("/videos/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: int,
    request: VideoAdminAction,
    admin: AdminUserDep,
    db: SessionDep,
) -> Video:
    """Remove, restore, restrict or change visibility of a video."""
    video = catalog.get_video(db, video_id)
    return admin_service.apply_video_action(db, admin, video, request)


@router.delete("/videos/{video_id}", response_model=MessageResponse)
async def delete_video(
    video_id: int,
    admin: AdminUserDep,
    db: SessionDep,
    reason: str | None = None,
) -> MessageResponse:
    """Permanently delete a video."""
    video = catalog.get_video(db, video_id)
    admin_service.delete_video(db, admin, video, reason)
    return MessageResponse(message="Video deleted")


# --- Audit and analytics -----------------------------------------------------------
@router.get("/audit-logs", response_model=Page[AuditLogResponse])
async def list_audit_logs(
    _admin: AdminUserDep,
    db: SessionDep,
    action: str | None = None,
    target_type: str | None = None,
    admin_id: int | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
) -> dict:
    """List admin actions."""
    query = audit.audit_logs(db, action=action, target_type=target_type, admin_id=admin_id)
    query = apply_sort(query, sort_by, sort_order, _AUDIT_SORT)
    return paginate(query, page, limit)


@router.get("/analytics", response_model=AnalyticsOverview)
async def analytics(
    _admin: AdminUserDep,
    db: SessionDep,
    period: int = Query(30, ge=1, le=365),
) -> dict:
    """Return platform totals and recent activity."""
    return admin_service.analytics_overview(db, period)
