"""Domain exceptions raised by services and mapped to HTTP responses."""

from __future__ import annotations

from fastapi import status


class ServiceError(RuntimeError):
    """Base exception for failures surfaced to API callers.

    Each subclass carries the HTTP status it maps to so the exception handlers
    registered in ``vidshare.main`` can render a uniform ``{"error": ...}`` body.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(ServiceError):
    """Raised when input is well-formed but violates a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ServiceError):
    """Raised when the caller's identity cannot be established."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(ServiceError):
    """Raised when the caller lacks the role or ownership required."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Raised when a create would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT


class RateLimitedError(ServiceError):
    """Raised when a caller exceeds a request budget."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after
