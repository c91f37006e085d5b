# src/safesync_server/api/__init__.py
"""HTTP API for the SafeSync server."""

from .endpoints import (
    auth_router,
    friends_router,
    messages_router,
    system_router,
    users_router,
)

__all__ = [
    "auth_router",
    "friends_router",
    "messages_router",
    "system_router",
    "users_router",
]
