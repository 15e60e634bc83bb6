# src/vidshare/api/v1/endpoints/videos.py
"""Video catalog and engagement endpoints."""

import re
import secrets
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from vidshare.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from vidshare.core.settings import settings
from vidshare.models import Flag, Video, VideoType
from vidshare.schemas.common import Page
from vidshare.schemas.engagement import MyVoteResponse, ViewResult, VoteRequest, VoteResult
from vidshare.schemas.moderation import FlagCreate, FlagResponse
from vidshare.schemas.video import VideoCreate, VideoResponse
from vidshare.services import catalog, engagement
from vidshare.services.listing import paginate
from vidshare.services.moderation import ModerationService
from vidshare.services.view_dedupe import ViewDedupeService, get_view_dedupe_service

router = APIRouter(prefix="/videos", tags=["videos"])

_SESSION_TOKEN = re.compile(r"^[A-Za-z0-9_-]{16,64}$")


def get_view_dedupe_service_dep() -> ViewDedupeService:
    """Return the view dedupe service for the configured backend."""
    return get_view_dedupe_service()


ViewDedupeDep = Annotated[ViewDedupeService, Depends(get_view_dedupe_service_dep)]


@router.get("", response_model=Page[VideoResponse])
async def list_videos(
    db: SessionDep,
    channel_id: int | None = None,
    video_type: VideoType | None = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List public videos, newest first."""
    query = catalog.public_videos(db, channel_id=channel_id, video_type=video_type)
    return paginate(query, page, limit)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    video_data: VideoCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Video:
    """Register a video on one of the caller's channels."""
    return catalog.create_video(db, current_user, video_data)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, current_user: OptionalUserDep, db: SessionDep) -> Video:
    """Return a single video."""
    return catalog.get_visible_video(db, video_id, current_user)


@router.post("/{video_id}/like", response_model=VoteResult)
async def vote_on_video(
    video_id: int,
    vote: VoteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Toggle the caller's like or dislike on a video."""
    video = catalog.get_visible_video(db, video_id, current_user)
    action = engagement.toggle_vote(db, current_user, video, vote.type)
    return VoteResult(
        action=action,
        like_count=video.like_count,
        dislike_count=video.dislike_count,
    )


@router.get("/{video_id}/like", response_model=MyVoteResponse)
async def get_my_vote(
    video_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Return the caller's current vote on a video."""
    video = catalog.get_visible_video(db, video_id, current_user)
    return MyVoteResponse(type=engagement.current_vote(db, current_user, video))


@router.post("/{video_id}/view", response_model=ViewResult)
async def record_view(
    video_id: int,
    request: Request,
    response: Response,
    current_user: OptionalUserDep,
    dedupe: ViewDedupeDep,
    db: SessionDep,
) -> ViewResult:
    """Count a view at most once per viewer within the dedupe window.

    Anonymous viewers are tracked by an opaque session token in an httpOnly
    cookie; the list of viewed videos stays on the server.
    """
    video = catalog.get_visible_video(db, video_id, current_user)

    if current_user is not None:
        viewer_key = f"user:{current_user.id}"
        token = None
    else:
        token = request.cookies.get(settings.view_cookie_name)
        if not token or not _SESSION_TOKEN.match(token):
            token = secrets.token_urlsafe(24)
        viewer_key = f"session:{token}"

    counted = engagement.record_view(db, video, viewer_key, dedupe, current_user)

    if token is not None and (counted or request.cookies.get(settings.view_cookie_name) != token):
        response.set_cookie(
            settings.view_cookie_name,
            token,
            max_age=settings.view_dedupe_window_seconds,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )

    return ViewResult(already_viewed=not counted, view_count=video.view_count)


@router.post("/{video_id}/flag", response_model=FlagResponse, status_code=status.HTTP_201_CREATED)
async def flag_video(
    video_id: int,
    flag_data: FlagCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Flag:
    """Report a video for review."""
    video = catalog.get_visible_video(db, video_id, current_user)
    return ModerationService.create_flag(db, current_user, video, flag_data)
