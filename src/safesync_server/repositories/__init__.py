"""Repositories wrapping SQLAlchemy access for each store."""

from .message_repo import MessageRepository
from .relationship_repo import RelationshipRepository
from .user_repo import UserRepository

__all__ = ["MessageRepository", "RelationshipRepository", "UserRepository"]
