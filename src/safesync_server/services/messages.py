"""Opaque message relay between two usernames.

Delivery does not consult the friendship graph; any user can message any
other username.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from safesync_server.core.errors import InvalidInputError
from safesync_server.db.session import unit_of_work
from safesync_server.models import Message
from safesync_server.repositories import MessageRepository

logger = logging.getLogger(__name__)


class MessageService:
    """Stores and returns message blobs."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.messages = MessageRepository(session)

    def send_message(self, sender: str, recipient: str, content: str) -> Message:
        """Persist a message from ``sender`` to ``recipient``."""
        if not sender or not recipient or not content:
            raise InvalidInputError("Sender, recipient and content must not be empty")
        with unit_of_work(self.session):
            message = self.messages.create(sender=sender, recipient=recipient, content=content)
        logger.debug("Stored message %s from %s to %s", message.id, sender, recipient)
        return message

    def get_messages(self, user_a: str, user_b: str) -> list[Message]:
        """Return the conversation between two users, oldest first."""
        with unit_of_work(self.session):
            return self.messages.list_between(user_a, user_b)
