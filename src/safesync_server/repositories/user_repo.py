"""Data access helpers for registered users."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from safesync_server.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        """Return the user with exactly this (case-sensitive) username."""
        return self.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def get_many_by_id(self, user_ids: Iterable[int]) -> list[User]:
        """Return users for the given ids ordered by username."""
        ids = list(user_ids)
        if not ids:
            return []
        result = self.session.execute(
            select(User).where(User.id.in_(ids)).order_by(User.username)
        )
        return list(result.scalars())

    def list_usernames(self) -> list[str]:
        """Return every username in registration order."""
        result = self.session.execute(select(User.username).order_by(User.id))
        return list(result.scalars())

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        public_keys: Iterable[str | None] = (),
    ) -> User:
        """Insert a new user and flush so the id is assigned.

        Args:
            username: Unique username; uniqueness is enforced by the table.
            password_hash: Already-hashed password, never plaintext.
            public_keys: Up to four opaque key strings, in slot order.
        """
        keys = list(public_keys)[:4]
        keys += [None] * (4 - len(keys))
        user = User(
            username=username,
            password_hash=password_hash,
            public_key_1=keys[0],
            public_key_2=keys[1],
            public_key_3=keys[2],
            public_key_4=keys[3],
        )
        self.session.add(user)
        self.session.flush()
        return user
