# src/vidshare/api/v1/endpoints/copyright.py
"""Copyright claim endpoints for rights holders and video owners."""

from fastapi import APIRouter, Query, status

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.models import CopyrightClaim
from vidshare.schemas.common import Page
from vidshare.schemas.moderation import ClaimCreate, ClaimResponse, CounterNoticeRequest
from vidshare.services import catalog
from vidshare.services.listing import paginate
from vidshare.services.moderation import ModerationService

router = APIRouter(prefix="/copyright/claims", tags=["copyright"])


@router.get("", response_model=Page[ClaimResponse])
async def list_claims_against_me(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """Return claims filed against the caller's videos."""
    return paginate(ModerationService.claims_against(db, current_user.id), page, limit)


@router.post("", response_model=ClaimResponse, status_code=status.HTTP_201_CREATED)
async def file_claim(
    payload: ClaimCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CopyrightClaim:
    """File a rights claim against a video."""
    video = catalog.get_visible_video(db, payload.video_id, current_user)
    return ModerationService.file_claim(db, current_user, video, payload)


@router.post("/{claim_id}/counter-notice", response_model=ClaimResponse)
async def submit_counter_notice(
    claim_id: int,
    payload: CounterNoticeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CopyrightClaim:
    """Dispute a claim on one of the caller's videos."""
    claim = ModerationService.get_claim(db, claim_id)
    return ModerationService.counter_notice(db, current_user, claim, payload.statement)
