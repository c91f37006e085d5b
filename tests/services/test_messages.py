# tests/services/test_messages.py
"""Tests for the message relay service."""

import pytest

from safesync_server.core.errors import InvalidInputError


def test_conversation_includes_both_directions_in_order(messages) -> None:
    messages.send_message("alice", "bob", "c1")
    messages.send_message("bob", "alice", "c2")
    messages.send_message("alice", "carol", "other")
    messages.send_message("alice", "bob", "c3")

    conversation = messages.get_messages("bob", "alice")

    assert [m.content for m in conversation] == ["c1", "c2", "c3"]


def test_messages_do_not_require_friendship(messages) -> None:
    message = messages.send_message("stranger", "alice", "hi")

    assert message.id is not None


@pytest.mark.parametrize(
    "sender,recipient,content",
    [("", "bob", "x"), ("alice", "", "x"), ("alice", "bob", "")],
)
def test_empty_fields_rejected(messages, sender, recipient, content) -> None:
    with pytest.raises(InvalidInputError):
        messages.send_message(sender, recipient, content)
