# src/vidshare/schemas/auth.py
"""Account and authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from vidshare.models.user import Role


class RegisterRequest(BaseModel):
    """Schema for creating an account with email and password."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    username: str | None = Field(
        None,
        min_length=3,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
    )


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for a bearer token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token issued after a successful login."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public view of an account."""

    id: int
    email: str
    name: str
    username: str | None
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Compact account reference embedded in other responses."""

    id: int
    name: str
    username: str | None

    model_config = ConfigDict(from_attributes=True)
