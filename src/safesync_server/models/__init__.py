# src/safesync_server/models/__init__.py
"""SQLAlchemy models for the SafeSync server."""

from .friend_request import FriendRequest
from .friendship import Friendship
from .message import Message
from .user import User

__all__ = [
    "FriendRequest",
    "Friendship",
    "Message",
    "User",
]
