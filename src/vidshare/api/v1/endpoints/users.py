# src/vidshare/api/v1/endpoints/users.py
"""The caller's personal library: block list, watch later and history."""

from fastapi import APIRouter, Query, status

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.models import BlockedUser, WatchLater
from vidshare.schemas.common import MessageResponse, Page
from vidshare.schemas.engagement import (
    BlockRequest,
    BlockResponse,
    WatchHistoryResponse,
    WatchLaterRequest,
    WatchLaterResponse,
)
from vidshare.services import accounts, catalog, engagement
from vidshare.services.listing import paginate

router = APIRouter(prefix="/user", tags=["library"])


# --- Block list --------------------------------------------------------------------
@router.get("/blocked-users", response_model=list[BlockResponse])
async def list_blocked_users(current_user: CurrentUserDep, db: SessionDep) -> list[BlockedUser]:
    """Return the caller's block list."""
    return accounts.blocked_users(db, current_user.id).all()


@router.post(
    "/blocked-users",
    response_model=BlockResponse,
    status_code=status.HTTP_201_CREATED,
)
async def block_user(
    payload: BlockRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> BlockedUser:
    """Block another user."""
    return accounts.block_user(db, current_user, payload.blocked_user_id)


@router.delete("/blocked-users/{block_id}", response_model=MessageResponse)
async def unblock_user(
    block_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Remove one of the caller's block records."""
    accounts.unblock(db, current_user, block_id)
    return MessageResponse(message="User unblocked")


# --- Watch later -------------------------------------------------------------------
@router.get("/watch-later", response_model=Page[WatchLaterResponse])
async def list_watch_later(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """Return the caller's saved videos."""
    return paginate(engagement.watch_later_entries(db, current_user.id), page, limit)


@router.post(
    "/watch-later",
    response_model=WatchLaterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_watch_later(
    payload: WatchLaterRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> WatchLater:
    """Save a video for later."""
    video = catalog.get_visible_video(db, payload.video_id, current_user)
    return engagement.add_watch_later(db, current_user, video)


@router.delete("/watch-later", response_model=MessageResponse)
async def remove_watch_later(
    current_user: CurrentUserDep,
    db: SessionDep,
    video_id: int | None = None,
) -> MessageResponse:
    """Remove one saved video, or clear the list when no ``video_id`` is given."""
    if video_id is None:
        removed = engagement.clear_watch_later(db, current_user)
        return MessageResponse(message=f"Watch later cleared ({removed} removed)")
    engagement.remove_watch_later(db, current_user, video_id)
    return MessageResponse(message="Removed from watch later")


# --- History -----------------------------------------------------------------------
@router.get("/history", response_model=Page[WatchHistoryResponse])
async def list_history(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """Return the caller's watch history, most recent first."""
    return paginate(engagement.watch_history_entries(db, current_user.id), page, limit)


@router.delete("/history", response_model=MessageResponse)
async def clear_history(
    current_user: CurrentUserDep,
    db: SessionDep,
    video_id: int | None = None,
) -> MessageResponse:
    """Delete one history entry, or the whole history."""
    removed = engagement.clear_watch_history(db, current_user.id, video_id)
    return MessageResponse(message=f"History cleared ({removed} removed)")
