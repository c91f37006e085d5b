"""Data access helpers for friend requests and friendship edges."""
from __future__ import annotations

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from safesync_server.models.friend_request import FriendRequest
from safesync_server.models.friendship import Friendship

__all__ = ["RelationshipRepository"]


class RelationshipRepository:
    """Storage for pending requests and confirmed friendship edges.

    Nothing here commits; the caller's unit of work decides when changes
    become visible.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    # Pending requests

    def get_request(self, sender: str, receiver: str) -> FriendRequest | None:
        """Return the pending request from ``sender`` to ``receiver`` if any."""
        return self.session.execute(
            select(FriendRequest).where(
                FriendRequest.sender_username == sender,
                FriendRequest.receiver_username == receiver,
            )
        ).scalar_one_or_none()

    def add_request(self, sender: str, receiver: str) -> FriendRequest:
        """Insert a pending request and flush it.

        A concurrent request between the same two users, in either
        direction, surfaces here (or at commit) as an ``IntegrityError``
        from the ``uq_friend_request_pair`` constraint.
        """
        request = FriendRequest(sender_username=sender, receiver_username=receiver)
        self.session.add(request)
        self.session.flush()
        return request

    def delete_request(self, sender: str, receiver: str) -> int:
        """Delete the pending request for the ordered pair.

        Returns:
            Number of rows removed (0 or 1).
        """
        result = self.session.execute(
            delete(FriendRequest).where(
                FriendRequest.sender_username == sender,
                FriendRequest.receiver_username == receiver,
            )
        )
        return int(result.rowcount or 0)

    def list_incoming(self, receiver: str) -> list[FriendRequest]:
        """Return requests addressed to ``receiver`` in insertion order."""
        result = self.session.execute(
            select(FriendRequest)
            .where(FriendRequest.receiver_username == receiver)
            .order_by(FriendRequest.id)
        )
        return list(result.scalars())

    def list_outgoing(self, sender: str) -> list[FriendRequest]:
        """Return requests sent by ``sender`` in insertion order."""
        result = self.session.execute(
            select(FriendRequest)
            .where(FriendRequest.sender_username == sender)
            .order_by(FriendRequest.id)
        )
        return list(result.scalars())

    # Friendship edges

    def get_edge(self, user_a_id: int, user_b_id: int) -> Friendship | None:
        """Return the edge between two user ids regardless of argument order."""
        low, high = Friendship.canonical_pair(user_a_id, user_b_id)
        return self.session.get(Friendship, (low, high))

    def add_edge(self, user_a_id: int, user_b_id: int) -> Friendship:
        """Insert the canonical edge for a pair, returning the existing one if present."""
        existing = self.get_edge(user_a_id, user_b_id)
        if existing is not None:
            return existing
        low, high = Friendship.canonical_pair(user_a_id, user_b_id)
        edge = Friendship(user_low_id=low, user_high_id=high)
        self.session.add(edge)
        self.session.flush()
        return edge

    def delete_edge(self, user_a_id: int, user_b_id: int) -> int:
        """Delete the edge for a pair; returns rows removed (0 when already absent)."""
        low, high = Friendship.canonical_pair(user_a_id, user_b_id)
        result = self.session.execute(
            delete(Friendship).where(
                Friendship.user_low_id == low,
                Friendship.user_high_id == high,
            )
        )
        return int(result.rowcount or 0)

    def friend_ids(self, user_id: int) -> list[int]:
        """Return ids of every user sharing an edge with ``user_id``."""
        result = self.session.execute(
            select(Friendship).where(
                or_(Friendship.user_low_id == user_id, Friendship.user_high_id == user_id)
            )
        )
        return [edge.other(user_id) for edge in result.scalars()]
