# tests/factories.py
"""Row builders shared by the test suite."""
from __future__ import annotations

from decimal import Decimal
from itertools import count

from sqlalchemy.orm import Session

from vidshare.core.security import create_access_token, hash_password
from vidshare.models import (
    Channel,
    Role,
    Transaction,
    TransactionStatus,
    TransactionType,
    User,
    Video,
    Visibility,
)

TEST_PASSWORD = "correct-horse-battery"

_USER_COUNTER = count(1)
_HANDLE_COUNTER = count(1)


def make_user(db: Session, *, role: Role = Role.USER, name: str = "Test User") -> User:
    """Persist a user with the shared test password."""
    n = next(_USER_COUNTER)
    user = User(
        email=f"user{n}@example.com",
        name=name,
        username=f"user{n}",
        password_hash=hash_password(TEST_PASSWORD),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_channel(db: Session, owner: User, *, subscriber_count: int = 0) -> Channel:
    n = next(_HANDLE_COUNTER)
    channel = Channel(
        owner_id=owner.id,
        name=f"Channel {n}",
        handle=f"channel_{n}",
        subscriber_count=subscriber_count,
    )
    db.add(channel)
    db.commit()
    db.refresh(channel)
    return channel


def make_video(
    db: Session,
    channel: Channel,
    *,
    title: str = "Test video",
    visibility: Visibility = Visibility.PUBLIC,
) -> Video:
    video = Video(channel_id=channel.id, title=title, visibility=visibility)
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


def add_transaction(
    db: Session,
    user: User,
    amount: str,
    *,
    kind: TransactionType = TransactionType.AD_REVENUE,
    status: TransactionStatus = TransactionStatus.COMPLETED,
) -> Transaction:
    tx = Transaction(user_id=user.id, type=kind, amount=Decimal(amount), status=status)
    db.add(tx)
    db.commit()
    db.refresh(tx)
    return tx


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
