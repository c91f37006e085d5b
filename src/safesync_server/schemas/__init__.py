"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse, StatusResponse
from .friends import (
    FriendRequestPayload,
    FriendRequestResponse,
    RelationshipResponse,
    RemoveFriendPayload,
)
from .message import MessageCreate, MessageResponse
from .user import (
    IdentitySummary,
    LoginRequest,
    LoginResponse,
    PublicKeysResponse,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "ErrorResponse", "StatusResponse",
    "FriendRequestPayload", "FriendRequestResponse",
    "RelationshipResponse", "RemoveFriendPayload",
    "MessageCreate", "MessageResponse",
    "IdentitySummary", "LoginRequest", "LoginResponse",
    "PublicKeysResponse", "RegisterRequest", "UserResponse",
]
