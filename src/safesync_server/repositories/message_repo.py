"""Data access helpers for relayed messages."""
from __future__ import annotations

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from safesync_server.models.message import Message

__all__ = ["MessageRepository"]


class MessageRepository:
    """Thin wrapper around database access for message rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, sender: str, recipient: str, content: str) -> Message:
        """Insert a message and flush so the id is assigned."""
        message = Message(sender=sender, recipient=recipient, content=content)
        self.session.add(message)
        self.session.flush()
        return message

    def list_between(self, user_a: str, user_b: str) -> list[Message]:
        """Return messages exchanged in either direction, oldest first."""
        result = self.session.execute(
            select(Message)
            .where(
                or_(
                    and_(Message.sender == user_a, Message.recipient == user_b),
                    and_(Message.sender == user_b, Message.recipient == user_a),
                )
            )
            .order_by(Message.id)
        )
        return list(result.scalars())
