"""Engine, session factory and transaction helpers."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from vidshare.core.settings import settings


class Base(DeclarativeBase):
    """Root of every VidShare table."""


# Models register themselves on Base.metadata at import time.
import vidshare.models  # noqa: E402,F401


def enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """Turn on SQLite's foreign key enforcement, which is off per connection by default."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite connections may be shared across threads and enforce FKs."""
    is_sqlite = url.startswith("sqlite")
    engine = create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        event.listen(engine, "connect", enable_sqlite_foreign_keys)
    return engine


engine = build_engine(settings.effective_database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session dependency."""
    with SessionLocal() as db:
        yield db


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    Base.metadata.drop_all(bind=engine)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit the enclosed writes as one unit, rolling back on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
