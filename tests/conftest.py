# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-suite")
os.environ.pop("REDIS_URL", None)

from vidshare.db.session import Base, enable_sqlite_foreign_keys
from vidshare.db.session import get_db as app_get_session
from vidshare.main import app as fastapi_app
from vidshare.models import Channel, Role, User, Video
from vidshare.services.cache import get_redis
from vidshare.services.rate_limit import clear_local_windows
from vidshare.services.view_dedupe import clear_local_views

from tests.factories import bearer, make_channel, make_user, make_video

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Services commit, so wipe every table to give each test a clean database.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def reset_server_state() -> Iterator[None]:
    """Start every test with empty in-process dedupe and rate-limit stores."""
    get_redis.cache_clear()
    clear_local_views()
    clear_local_windows()
    yield
    clear_local_views()
    clear_local_windows()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Primary signed-in viewer."""
    return make_user(db_session)


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Secondary account."""
    return make_user(db_session, name="Other User")


@pytest.fixture()
def creator(db_session: Session) -> User:
    """Account that owns ``channel``."""
    return make_user(db_session, role=Role.CREATOR, name="Creator")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    return make_user(db_session, role=Role.ADMIN, name="Admin")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture()
def creator_token(creator: User) -> dict[str, str]:
    return bearer(creator)


@pytest.fixture()
def admin_token(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def channel(db_session: Session, creator: User) -> Channel:
    return make_channel(db_session, creator)


@pytest.fixture()
def video(db_session: Session, channel: Channel) -> Video:
    """A public video on ``channel``."""
    return make_video(db_session, channel)
