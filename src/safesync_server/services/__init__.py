"""Business logic services for the SafeSync server."""

from .accounts import AccountService
from .friendship import FriendshipService, RelationshipState
from .messages import MessageService

__all__ = [
    "AccountService",
    "FriendshipService",
    "MessageService",
    "RelationshipState",
]
