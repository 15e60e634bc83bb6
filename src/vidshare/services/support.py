# src/vidshare/services/support.py
"""Contact submissions and FAQ management."""
from __future__ import annotations

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from vidshare.core.errors import NotFoundError
from vidshare.db.session import atomic
from vidshare.db.time import utcnow
from vidshare.models import FAQ, ContactStatus, ContactSubmission, User
from vidshare.schemas.support import ContactCreate, ContactUpdate, FAQCreate, FAQUpdate
from vidshare.services.audit import record_audit

__all__ = [
    "submit_contact",
    "contact_submissions",
    "get_submission",
    "update_submission",
    "delete_submission",
    "published_faqs",
    "all_faqs",
    "get_faq",
    "create_faq",
    "update_faq",
    "delete_faq",
]

logger = logging.getLogger(__name__)


# --- Contact -----------------------------------------------------------------------
def submit_contact(db: Session, data: ContactCreate) -> ContactSubmission:
    """Store a public contact form submission."""
    submission = ContactSubmission(
        name=data.name,
        email=data.email,
        subject=data.subject,
        message=data.message,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    logger.info("Contact submission %s received", submission.id)
    return submission


def contact_submissions(
    db: Session,
    *,
    status: ContactStatus | None = None,
    search: str | None = None,
) -> Query:
    """Query submissions with optional status and text filters."""
    query = db.query(ContactSubmission)
    if status is not None:
        query = query.filter(ContactSubmission.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                ContactSubmission.name.ilike(pattern),
                ContactSubmission.email.ilike(pattern),
                ContactSubmission.subject.ilike(pattern),
            )
        )
    return query


def get_submission(db: Session, submission_id: int) -> ContactSubmission:
    submission = db.get(ContactSubmission, submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


def update_submission(
    db: Session,
    admin: User,
    submission: ContactSubmission,
    data: ContactUpdate,
) -> ContactSubmission:
    """Apply an admin's triage to a submission; a response stamps ``responded_at``."""
    changes = data.model_dump(exclude_unset=True)
    before = {key: _plain(getattr(submission, key)) for key in changes}

    with atomic(db):
        for key, value in changes.items():
            setattr(submission, key, value)
        if changes.get("response"):
            submission.responded_at = utcnow()
        record_audit(
            db,
            admin,
            "CONTACT_UPDATED",
            "ContactSubmission",
            submission.id,
            old_value=before,
            new_value={key: _plain(value) for key, value in changes.items()},
        )
    db.refresh(submission)
    return submission


def delete_submission(db: Session, admin: User, submission: ContactSubmission) -> None:
    with atomic(db):
        record_audit(
            db,
            admin,
            "CONTACT_DELETED",
            "ContactSubmission",
            submission.id,
            old_value={"subject": submission.subject, "email": submission.email},
        )
        db.delete(submission)


def _plain(value):
    return getattr(value, "value", value)


# --- FAQ ---------------------------------------------------------------------------
def published_faqs(db: Session, category: str | None = None) -> list[FAQ]:
    """Return published FAQ entries in display order."""
    query = db.query(FAQ).filter(FAQ.published.is_(True))
    if category:
        query = query.filter(FAQ.category == category)
    return query.order_by(FAQ.category, FAQ.position, FAQ.id).all()


def all_faqs(db: Session) -> list[FAQ]:
    return db.query(FAQ).order_by(FAQ.category, FAQ.position, FAQ.id).all()


def get_faq(db: Session, faq_id: int) -> FAQ:
    faq = db.get(FAQ, faq_id)
    if faq is None:
        raise NotFoundError("FAQ not found")
    return faq


def create_faq(db: Session, admin: User, data: FAQCreate) -> FAQ:
    """Append a new entry after the last one."""
    with atomic(db):
        last = db.query(func.max(FAQ.position)).scalar()
        faq = FAQ(
            question=data.question,
            answer=data.answer,
            category=data.category,
            published=data.published,
            position=0 if last is None else last + 1,
        )
        db.add(faq)
        db.flush()
        record_audit(
            db,
            admin,
            "FAQ_CREATED",
            "FAQ",
            faq.id,
            new_value={"question": faq.question, "category": faq.category},
        )
    db.refresh(faq)
    return faq


def update_faq(db: Session, admin: User, faq: FAQ, data: FAQUpdate) -> FAQ:
    changes = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    before = {key: getattr(faq, key) for key in changes}
    with atomic(db):
        for key, value in changes.items():
            setattr(faq, key, value)
        record_audit(
            db, admin, "FAQ_UPDATED", "FAQ", faq.id, old_value=before, new_value=changes,
        )
    db.refresh(faq)
    return faq


def delete_faq(db: Session, admin: User, faq: FAQ) -> None:
    with atomic(db):
        record_audit(
            db, admin, "FAQ_DELETED", "FAQ", faq.id, old_value={"question": faq.question},
        )
        db.delete(faq)
