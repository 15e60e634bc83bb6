"""Shared API dependencies for authentication and authorization."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from vidshare.core.security import decode_access_token
from vidshare.db.session import get_db
from vidshare.models import Role, User, UserStatus

# HTTP Bearer scheme for JWT authentication; missing headers are handled below
# so optional-auth routes can share it.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(credentials: HTTPAuthorizationCredentials, db: Session) -> User:
    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _unauthorized() from err
    if user_id is None:
        raise _unauthorized()
    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    if user.status != UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account {user.status.value.lower()}",
        )
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if sent
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or names no user
    """
    if credentials is None:
        raise _unauthorized("Unauthorized")
    return _resolve_user(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the caller when a token is sent, else None.

    A token that is present but invalid is still rejected with 401.
    """
    if credentials is None:
        return None
    return _resolve_user(credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_role(*roles: Role) -> Callable[[User], User]:
    """Build a dependency admitting only callers holding one of ``roles``."""

    def _checker(user: CurrentUserDep) -> User:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return user

    return _checker


AdminUserDep = Annotated[User, Depends(require_role(Role.ADMIN))]


def ensure_owner(owner_id: int, user: User, detail: str = "Forbidden") -> None:
    """Raise 403 unless ``user`` is ``owner_id``."""
    if owner_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
