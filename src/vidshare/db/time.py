"""Timezone-aware clock helpers shared by models and services."""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    return datetime.now(UTC)


def days_from_now(days: int) -> datetime:
    """Return the instant ``days`` from now; negative values look back."""
    return utcnow() + timedelta(days=days)
