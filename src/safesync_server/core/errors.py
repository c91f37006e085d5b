"""Error taxonomy shared by services and the HTTP layer.

Every failure a service operation can report is one of the classes below.
Each carries the HTTP status the API layer renders it with, so endpoints
never translate errors by hand.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(RuntimeError):
    """Base exception for failures surfaced to API clients.

    This is the base class for all service-level exceptions.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body rendered for this error."""
        return {"error": self.message}


class InvalidInputError(ServiceError):
    """Raised for malformed or missing request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "invalid_input"


class UnauthorizedError(ServiceError):
    """Raised when credentials or session tokens are rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthorized"


class NotFoundError(ServiceError):
    """Raised when a referenced user or friend request does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ConflictError(ServiceError):
    """Raised for duplicate usernames and duplicate or crossing friend requests."""

    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class InternalError(ServiceError):
    """Raised when the store fails in a way the caller cannot fix."""


__all__ = [
    "ServiceError",
    "InvalidInputError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
