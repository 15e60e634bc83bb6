# src/vidshare/services/audit.py
"""Audit trail for administrator actions."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Query, Session

from vidshare.models import AuditLog, User

__all__ = ["record_audit", "audit_logs"]

logger = logging.getLogger(__name__)


def record_audit(
    db: Session,
    admin: User,
    action: str,
    target_type: str,
    target_id: int,
    *,
    old_value: dict[str, Any] | None = None,
    new_value: dict[str, Any] | None = None,
    notes: str | None = None,
) -> AuditLog:
    """Add an audit entry to the caller's open transaction."""
    entry = AuditLog(
        admin_id=admin.id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        old_value=old_value,
        new_value=new_value,
        notes=notes,
    )
    db.add(entry)
    logger.info(
        "Admin %s %s %s:%s", admin.id, action, target_type, target_id,
    )
    return entry


def audit_logs(
    db: Session,
    *,
    action: str | None = None,
    target_type: str | None = None,
    admin_id: int | None = None,
) -> Query:
    """Query audit entries with optional filters."""
    query = db.query(AuditLog)
    if action:
        query = query.filter(AuditLog.action == action)
    if target_type:
        query = query.filter(AuditLog.target_type == target_type)
    if admin_id is not None:
        query = query.filter(AuditLog.admin_id == admin_id)
    return query
