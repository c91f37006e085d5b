# tests/test_db_models.py
"""Constraint tests for the relational schema."""

import pytest
from sqlalchemy.exc import IntegrityError

from safesync_server.models import FriendRequest, Friendship


def test_friendship_rejects_non_canonical_order(db_session, alice, bob) -> None:
    low, high = sorted([alice.id, bob.id])
    db_session.add(Friendship(user_low_id=high, user_high_id=low))

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_friendship_pair_is_unique(db_session, alice, bob) -> None:
    low, high = Friendship.canonical_pair(bob.id, alice.id)
    db_session.add(Friendship(user_low_id=low, user_high_id=high))
    db_session.flush()
    db_session.expunge_all()

    db_session.add(Friendship(user_low_id=low, user_high_id=high))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_friend_request_pair_is_unique(db_session) -> None:
    db_session.add(FriendRequest(sender_username="alice", receiver_username="bob"))
    db_session.flush()
    db_session.add(FriendRequest(sender_username="alice", receiver_username="bob"))

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_friend_request_reverse_pair_is_rejected(db_session) -> None:
    db_session.add(FriendRequest(sender_username="alice", receiver_username="bob"))
    db_session.flush()
    db_session.add(FriendRequest(sender_username="bob", receiver_username="alice"))

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_friend_request_pair_key_is_sorted(db_session) -> None:
    request = FriendRequest(sender_username="zoe", receiver_username="adam")
    db_session.add(request)
    db_session.flush()

    assert (request.pair_low, request.pair_high) == ("adam", "zoe")
    db_session.rollback()


def test_canonical_pair_and_other() -> None:
    assert Friendship.canonical_pair(5, 2) == (2, 5)
    assert Friendship.canonical_pair(2, 5) == (2, 5)

    edge = Friendship(user_low_id=2, user_high_id=5)
    assert edge.other(2) == 5
    assert edge.other(5) == 2
