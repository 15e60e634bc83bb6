# src/vidshare/services/listing.py
"""Pagination, sorting and status tallies shared by list endpoints."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import InstrumentedAttribute, Query, Session

from vidshare.core.errors import ValidationFailedError

MAX_PAGE_SIZE = 100


def apply_sort(
    query: Query,
    sort_by: str,
    sort_order: str,
    allowed: dict[str, InstrumentedAttribute],
) -> Query:
    """Order ``query`` by an allow-listed column.

    Raises:
        ValidationFailedError: If ``sort_by`` or ``sort_order`` is not accepted.
    """
    column = allowed.get(sort_by)
    if column is None:
        raise ValidationFailedError(f"Invalid sort field: {sort_by}")
    if sort_order not in ("asc", "desc"):
        raise ValidationFailedError(f"Invalid sort order: {sort_order}")
    return query.order_by(column.asc() if sort_order == "asc" else column.desc())


def paginate(query: Query, page: int, limit: int) -> dict[str, Any]:
    """Return one page of ``query`` in the ``{items, pagination}`` envelope."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if total else 0,
        },
    }


def status_counts(
    db: Session,
    column: InstrumentedAttribute,
    statuses: type[Enum],
    *criteria: Any,
) -> dict[str, int]:
    """Count rows per status, reporting zero for statuses with no rows."""
    counts = {member.value: 0 for member in statuses}
    rows = db.query(column, func.count()).filter(*criteria).group_by(column).all()
    for value, count in rows:
        key = value.value if isinstance(value, Enum) else str(value)
        counts[key] = count
    return counts
