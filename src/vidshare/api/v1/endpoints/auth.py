# src/vidshare/api/v1/endpoints/auth.py
"""Authentication endpoints for the video platform API."""

from fastapi import APIRouter, status

from vidshare.api.v1.dependencies import CurrentUserDep, SessionDep
from vidshare.core.security import create_access_token
from vidshare.models import User
from vidshare.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from vidshare.services import accounts

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> User:
    """Create an account with email and password."""
    return accounts.create_user(db, payload)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange credentials for a bearer token."""
    user = accounts.authenticate(db, payload.email, payload.password)
    return TokenResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated account."""
    return current_user
