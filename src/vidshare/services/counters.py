# src/vidshare/services/counters.py
"""SQL-side updates for denormalized counters."""

from __future__ import annotations

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from vidshare.db.session import Base


def adjust_counters(db: Session, model: type[Base], ident: int, **deltas: int) -> None:
    """Add ``deltas`` to integer counter columns of one row, never going below zero.

    The arithmetic runs inside the UPDATE statement so concurrent requests
    cannot overwrite each other's increments.

    Args:
        db: Session whose open transaction the update joins.
        model: Mapped class owning the counters.
        ident: Primary key of the row to update.
        **deltas: Column name to signed change, e.g. ``like_count=-1``.
    """
    values = {}
    for name, delta in deltas.items():
        if delta == 0:
            continue
        column = getattr(model, name)
        if delta > 0:
            values[name] = column + delta
        else:
            values[name] = case((column + delta > 0, column + delta), else_=0)
    if not values:
        return
    db.execute(
        update(model)
        .where(model.id == ident)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
