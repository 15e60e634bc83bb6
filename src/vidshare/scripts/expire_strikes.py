# src/vidshare/scripts/expire_strikes.py
"""
Cron job retiring strikes whose expiry date has passed.

Run daily. Strike counts already ignore expired rows; this keeps the
``active`` flag honest for reporting and lifts strike suspensions whose
owners have fallen back under the threshold.
"""

import logging

from sqlalchemy.orm import Session

from vidshare.core.logging import configure_logging
from vidshare.db.session import SessionLocal
from vidshare.db.time import utcnow
from vidshare.models import Strike
from vidshare.services.moderation import ModerationService

logger = logging.getLogger(__name__)


def expire_strikes(db: Session) -> int:
    """Deactivate expired strikes and return how many changed."""
    changed = (
        db.query(Strike)
        .filter(
            Strike.active.is_(True),
            Strike.expires_at.is_not(None),
            Strike.expires_at <= utcnow(),
        )
        .update({"active": False}, synchronize_session=False)
    )
    db.commit()
    restored = ModerationService.lift_lapsed_suspensions(db)
    if restored:
        logger.info("Restored %s channel(s) after strike expiry", restored)
    return changed


def main() -> None:
    configure_logging()
    db = SessionLocal()
    try:
        changed = expire_strikes(db)
        print(f"Deactivated {changed} expired strike(s)")
    finally:
        db.close()


if __name__ == "__main__":
    main()
