# src/safesync_server/models/friendship.py
"""Confirmed friendship edges stored once per unordered pair."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from safesync_server.db.session import Base

from .user import utcnow


class Friendship(Base):
    """Symmetric friendship between two users.

    The pair is stored in canonical order (``user_low_id < user_high_id``), so
    one row answers the question in both directions and a half-removed edge
    cannot exist.
    """

    __tablename__ = "friendships"
    __table_args__ = (
        CheckConstraint("user_low_id < user_high_id", name="ck_friendship_canonical_order"),
    )

    user_low_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_high_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @staticmethod
    def canonical_pair(a: int, b: int) -> tuple[int, int]:
        """Return ``(a, b)`` ordered low to high."""
        return (a, b) if a < b else (b, a)

    def other(self, user_id: int) -> int:
        """Return the id on the opposite side of the edge from ``user_id``."""
        return self.user_high_id if user_id == self.user_low_id else self.user_low_id
