# src/vidshare/services/accounts.py
"""CRUD-style helpers for accounts and block lists."""
from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from vidshare.core import security
from vidshare.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from vidshare.models import BlockedUser, Role, User, UserStatus
from vidshare.schemas.auth import RegisterRequest

__all__ = [
    "get_user",
    "create_user",
    "authenticate",
    "block_user",
    "unblock",
    "blocked_users",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def create_user(db: Session, data: RegisterRequest, role: Role = Role.USER) -> User:
    """Persist a new account with a hashed password.

    Raises:
        ValidationFailedError: If the email or username is already registered.
    """
    email = data.email.lower()
    clauses = [User.email == email]
    if data.username:
        clauses.append(User.username == data.username)
    if db.query(User).filter(or_(*clauses)).first() is not None:
        raise ValidationFailedError("User with this email or username already exists")

    user = User(
        email=email,
        name=data.name,
        username=data.username,
        password_hash=security.hash_password(data.password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ValidationFailedError("User with this email or username already exists") from err
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the account matching the credentials.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
        PermissionDeniedError: If the account is suspended or banned.
    """
    user = db.query(User).filter(User.email == email.lower()).first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    if user.status != UserStatus.ACTIVE:
        raise PermissionDeniedError(f"Account {user.status.value.lower()}")
    return user


def block_user(db: Session, blocker: User, blocked_id: int) -> BlockedUser:
    """Add ``blocked_id`` to ``blocker``'s block list.

    Raises:
        ValidationFailedError: If the caller tries to block themselves.
        NotFoundError: If the target account does not exist.
        ConflictError: If the target is already blocked.
    """
    if blocked_id == blocker.id:
        raise ValidationFailedError("You cannot block yourself")
    if db.get(User, blocked_id) is None:
        raise NotFoundError("User not found")

    existing = (
        db.query(BlockedUser)
        .filter(BlockedUser.blocker_id == blocker.id, BlockedUser.blocked_id == blocked_id)
        .first()
    )
    if existing is not None:
        raise ConflictError("User is already blocked")

    block = BlockedUser(blocker_id=blocker.id, blocked_id=blocked_id)
    db.add(block)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("User is already blocked") from err
    db.refresh(block)
    return block


def unblock(db: Session, user: User, block_id: int) -> None:
    """Delete one of the caller's block records.

    Raises:
        NotFoundError: If the record does not exist.
        PermissionDeniedError: If the record belongs to someone else.
    """
    block = db.get(BlockedUser, block_id)
    if block is None:
        raise NotFoundError("Block record not found")
    if block.blocker_id != user.id:
        raise PermissionDeniedError("You can only unblock users you have blocked")
    db.delete(block)
    db.commit()


def blocked_users(db: Session, user_id: int) -> Query:
    """Query the caller's block list, most recent first."""
    return (
        db.query(BlockedUser)
        .filter(BlockedUser.blocker_id == user_id)
        .order_by(BlockedUser.created_at.desc(), BlockedUser.id.desc())
    )
