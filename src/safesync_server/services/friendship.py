"""Friendship state machine.

Every ordered pair of usernames (A, B) is in exactly one state:

* ``NONE``: no request in either direction and no edge.
* ``PENDING_OUTGOING``: A has asked B.
* ``PENDING_INCOMING``: B has asked A.
* ``FRIENDS``: a canonical edge exists.

Requests are created by ``send_request`` and destroyed by ``accept_request``
or ``decline_request``. Edges are created only by ``accept_request`` and
destroyed only by ``remove_friendship``. Each mutation runs in one unit of
work so a failure part-way leaves nothing behind.
"""

from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy.orm import Session

from safesync_server.core.errors import ConflictError, InvalidInputError, NotFoundError
from safesync_server.db.session import unit_of_work
from safesync_server.models import FriendRequest, User
from safesync_server.repositories import RelationshipRepository, UserRepository

logger = logging.getLogger(__name__)

DUPLICATE_REQUEST = "Friend request already exists"
ALREADY_FRIENDS = "Users are already friends"
EMPTY_PAIR = "Sender and receiver usernames must not be empty"


class RelationshipState(str, Enum):
    """Relationship between an actor and another user, seen from the actor."""

    NONE = "none"
    PENDING_OUTGOING = "pending_outgoing"
    PENDING_INCOMING = "pending_incoming"
    FRIENDS = "friends"


def _require_pair(first: str | None, second: str | None, message: str = EMPTY_PAIR) -> tuple[str, str]:
    if not first or not first.strip() or not second or not second.strip():
        raise InvalidInputError(message)
    return first, second


class FriendshipService:
    """Service enforcing friend request and friendship transitions."""

    def __init__(self, session: Session, *, require_registered_users: bool = True) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.relationships = RelationshipRepository(session)
        self.require_registered_users = require_registered_users

    def _are_friends(self, first: str, second: str) -> bool:
        a = self.users.get_by_username(first)
        b = self.users.get_by_username(second)
        if a is None or b is None:
            return False
        return self.relationships.get_edge(a.id, b.id) is not None

    def send_request(self, sender: str, receiver: str) -> FriendRequest:
        """Record a pending request from ``sender`` to ``receiver``.

        Raises:
            InvalidInputError: If a name is empty or the users are the same.
            NotFoundError: If either user is unregistered and registration is required.
            ConflictError: If the same request is already pending, the receiver
                already asked the sender, or the users are already friends.
        """
        sender, receiver = _require_pair(sender, receiver)
        if sender == receiver:
            raise InvalidInputError("Cannot send a friend request to yourself")

        with unit_of_work(self.session, conflict_message=DUPLICATE_REQUEST):
            if self.require_registered_users:
                if self.users.get_by_username(sender) is None:
                    raise NotFoundError("Sender not found")
                if self.users.get_by_username(receiver) is None:
                    raise NotFoundError("Receiver not found")

            if self.relationships.get_request(sender, receiver) is not None:
                logger.info("Duplicate friend request %s -> %s rejected", sender, receiver)
                raise ConflictError(DUPLICATE_REQUEST)
            if self.relationships.get_request(receiver, sender) is not None:
                logger.info("Crossing friend request %s -> %s rejected", sender, receiver)
                raise ConflictError("A friend request from this user is already pending")
            if self._are_friends(sender, receiver):
                raise ConflictError(ALREADY_FRIENDS)

            request = self.relationships.add_request(sender, receiver)
            # The insert holds the write lock; an accept committed since the
            # checks above is visible now.
            if self._are_friends(sender, receiver):
                logger.info("Friendship %s <-> %s appeared during request", sender, receiver)
                raise ConflictError(ALREADY_FRIENDS)

        logger.info("Friend request sent %s -> %s", sender, receiver)
        return request

    def accept_request(self, sender: str, receiver: str) -> None:
        """Turn the pending request ``sender -> receiver`` into a friendship.

        The request delete and the edge insert commit together or not at all.

        Raises:
            InvalidInputError: If a name is empty.
            NotFoundError: If the request, the sender or the receiver is missing.
        """
        sender, receiver = _require_pair(sender, receiver)
        logger.info("Accepting friend request from %s to %s", sender, receiver)

        with unit_of_work(self.session, conflict_message="Friendship changed concurrently, retry"):
            if self.relationships.get_request(sender, receiver) is None:
                raise NotFoundError("Friend request not found")

            sender_user = self.users.get_by_username(sender)
            if sender_user is None:
                raise NotFoundError("Sender not found")
            receiver_user = self.users.get_by_username(receiver)
            if receiver_user is None:
                raise NotFoundError("Receiver not found")

            # A concurrent accept/decline may have removed the row since the read.
            if self.relationships.delete_request(sender, receiver) != 1:
                raise NotFoundError("Friend request not found")
            self.relationships.add_edge(sender_user.id, receiver_user.id)

        logger.info("Friendship created between %s and %s", sender, receiver)

    def decline_request(self, sender: str, receiver: str) -> None:
        """Discard the pending request ``sender -> receiver``.

        Raises:
            InvalidInputError: If a name is empty.
            NotFoundError: If no such request is pending.
        """
        sender, receiver = _require_pair(sender, receiver)
        logger.info("Declining friend request from %s to %s", sender, receiver)

        with unit_of_work(self.session):
            if self.relationships.delete_request(sender, receiver) != 1:
                raise NotFoundError("Friend request not found")

    def remove_friendship(self, username: str, friend_username: str) -> bool:
        """Remove the friendship between two users.

        Removing an edge that does not exist is a successful no-op.

        Returns:
            True if an edge was deleted, False if there was none.

        Raises:
            InvalidInputError: If a name is empty.
            NotFoundError: If either user does not exist.
        """
        username, friend_username = _require_pair(
            username, friend_username, "Username and friend username must not be empty"
        )
        with unit_of_work(self.session):
            user = self.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User not found")
            friend = self.users.get_by_username(friend_username)
            if friend is None:
                raise NotFoundError("Friend not found")
            removed = self.relationships.delete_edge(user.id, friend.id) > 0

        if removed:
            logger.info("Friendship removed between %s and %s", username, friend_username)
        else:
            logger.info("No friendship between %s and %s to remove", username, friend_username)
        return removed

    def list_pending(self, receiver: str) -> list[FriendRequest]:
        """Return requests waiting for ``receiver`` to answer, oldest first."""
        with unit_of_work(self.session):
            return self.relationships.list_incoming(receiver)

    def list_outgoing(self, sender: str) -> list[FriendRequest]:
        """Return requests ``sender`` has made that are still pending."""
        with unit_of_work(self.session):
            return self.relationships.list_outgoing(sender)

    def list_friends(self, username: str) -> list[User]:
        """Return the friends of ``username`` ordered by username.

        Unknown users simply have no friends.
        """
        with unit_of_work(self.session):
            user = self.users.get_by_username(username)
            if user is None:
                return []
            return self.users.get_many_by_id(self.relationships.friend_ids(user.id))

    def relationship_state(self, username: str, other: str) -> RelationshipState:
        """Return how ``username`` currently relates to ``other``."""
        username, other = _require_pair(username, other, "Both usernames are required")
        with unit_of_work(self.session):
            if username != other and self._are_friends(username, other):
                return RelationshipState.FRIENDS
            if self.relationships.get_request(username, other) is not None:
                return RelationshipState.PENDING_OUTGOING
            if self.relationships.get_request(other, username) is not None:
                return RelationshipState.PENDING_INCOMING
            return RelationshipState.NONE
