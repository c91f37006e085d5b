# src/safesync_server/models/friend_request.py
"""Pending, directed friend requests."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from safesync_server.db.session import Base

from .user import utcnow


def _pair_low(context) -> str:
    params = context.get_current_parameters()
    return min(params["sender_username"], params["receiver_username"])


def _pair_high(context) -> str:
    params = context.get_current_parameters()
    return max(params["sender_username"], params["receiver_username"])


class FriendRequest(Base):
    """Unconfirmed friendship proposal from ``sender_username`` to ``receiver_username``.

    Rows are deleted, not archived, once the receiver accepts or declines.
    Usernames are plain columns rather than foreign keys; whether the users
    must exist is a service-level policy.

    ``pair_low``/``pair_high`` hold the two usernames in sorted order and are
    filled in on insert. Their unique constraint allows at most one pending
    request per pair of users, whichever direction it was sent in.
    """

    __tablename__ = "friend_requests"
    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_friend_request_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender_username: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    receiver_username: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    pair_low: Mapped[str] = mapped_column(String(150), nullable=False, default=_pair_low)
    pair_high: Mapped[str] = mapped_column(String(150), nullable=False, default=_pair_high)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<FriendRequest {self.sender_username!r} -> {self.receiver_username!r}>"
