# src/vidshare/api/v1/endpoints/faq.py
"""Public FAQ and its admin management."""

from fastapi import APIRouter, status

from vidshare.api.v1.dependencies import AdminUserDep, SessionDep
from vidshare.models import FAQ
from vidshare.schemas.common import MessageResponse
from vidshare.schemas.support import FAQCreate, FAQResponse, FAQUpdate
from vidshare.services import support

router = APIRouter(prefix="/faq", tags=["faq"])
admin_router = APIRouter(prefix="/admin/faq", tags=["admin"])


@router.get("", response_model=list[FAQResponse])
async def list_published_faqs(db: SessionDep, category: str | None = None) -> list[FAQ]:
    """Return published FAQ entries."""
    return support.published_faqs(db, category)


@admin_router.get("", response_model=list[FAQResponse])
async def list_all_faqs(_admin: AdminUserDep, db: SessionDep) -> list[FAQ]:
    """Return every FAQ entry, published or not."""
    return support.all_faqs(db)


@admin_router.post("", response_model=FAQResponse, status_code=status.HTTP_201_CREATED)
async def create_faq(payload: FAQCreate, admin: AdminUserDep, db: SessionDep) -> FAQ:
    """Add an FAQ entry at the end of the list."""
    return support.create_faq(db, admin, payload)


@admin_router.put("/{faq_id}", response_model=FAQResponse)
@admin_router.patch("/{faq_id}", response_model=FAQResponse)
async def update_faq(
    faq_id: int,
    payload: FAQUpdate,
    admin: AdminUserDep,
    db: SessionDep,
) -> FAQ:
    """Edit an FAQ entry."""
    faq = support.get_faq(db, faq_id)
    return support.update_faq(db, admin, faq, payload)


@admin_router.delete("/{faq_id}", response_model=MessageResponse)
async def delete_faq(faq_id: int, admin: AdminUserDep, db: SessionDep) -> MessageResponse:
    """Remove an FAQ entry."""
    faq = support.get_faq(db, faq_id)
    support.delete_faq(db, admin, faq)
    return MessageResponse(message="FAQ deleted")
