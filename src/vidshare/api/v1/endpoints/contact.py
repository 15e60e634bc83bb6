# src/vidshare/api/v1/endpoints/contact.py
"""Contact form endpoints: public submission and admin triage."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from vidshare.api.v1.dependencies import AdminUserDep, SessionDep
from vidshare.models import ContactStatus, ContactSubmission
from vidshare.schemas.common import MessageResponse, Page
from vidshare.schemas.support import ContactCreate, ContactResponse, ContactUpdate
from vidshare.services import support
from vidshare.services.listing import apply_sort, paginate
from vidshare.services.rate_limit import RateLimiter, get_contact_rate_limiter

router = APIRouter(prefix="/contact", tags=["contact"])

_SORTABLE = {
    "created_at": ContactSubmission.created_at,
    "status": ContactSubmission.status,
    "subject": ContactSubmission.subject,
}


def get_contact_rate_limiter_dep() -> RateLimiter:
    """Return the limiter guarding contact submissions."""
    return get_contact_rate_limiter()


RateLimiterDep = Annotated[RateLimiter, Depends(get_contact_rate_limiter_dep)]


def _client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: ContactCreate,
    request: Request,
    limiter: RateLimiterDep,
    db: SessionDep,
) -> MessageResponse:
    """Accept a public contact form submission."""
    limiter.hit(_client_key(request))
    support.submit_contact(db, payload)
    return MessageResponse(
        message="Your message has been submitted successfully. We'll get back to you soon."
    )


@router.get("", response_model=Page[ContactResponse])
async def list_submissions(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: ContactStatus | None = Query(None, alias="status"),
    search: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> dict:
    """List contact submissions."""
    query = support.contact_submissions(db, status=status_filter, search=search)
    query = apply_sort(query, sort_by, sort_order, _SORTABLE)
    return paginate(query, page, limit)


@router.get("/{submission_id}", response_model=ContactResponse)
async def get_submission(
    submission_id: int,
    _admin: AdminUserDep,
    db: SessionDep,
) -> ContactSubmission:
    """Return one submission."""
    return support.get_submission(db, submission_id)


@router.patch("/{submission_id}", response_model=ContactResponse)
async def update_submission(
    submission_id: int,
    payload: ContactUpdate,
    admin: AdminUserDep,
    db: SessionDep,
) -> ContactSubmission:
    """Change a submission's status, assignee or response."""
    submission = support.get_submission(db, submission_id)
    return support.update_submission(db, admin, submission, payload)


@router.delete("/{submission_id}", response_model=MessageResponse)
async def delete_submission(
    submission_id: int,
    admin: AdminUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete a submission."""
    submission = support.get_submission(db, submission_id)
    support.delete_submission(db, admin, submission)
    return MessageResponse(message="Submission deleted")
