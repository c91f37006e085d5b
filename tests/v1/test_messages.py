# tests/v1/test_messages.py
"""Tests for message relay endpoints."""

from fastapi import status


def test_send_and_fetch_conversation(client) -> None:
    first = client.post("/send_message", json={"sender": "alice", "recipient": "bob", "content": "ct-1"})
    client.post("/send_message", json={"sender": "bob", "recipient": "alice", "content": "ct-2"})
    client.post("/send_message", json={"sender": "alice", "recipient": "carol", "content": "ct-x"})

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["status"] == "Message sent"
    assert isinstance(first.json()["id"], int)

    response = client.get("/messages", params={"sender": "alice", "recipient": "bob"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [m["content"] for m in data] == ["ct-1", "ct-2"]
    assert {m["sender"] for m in data} == {"alice", "bob"}


def test_send_message_missing_field(client) -> None:
    response = client.post("/send_message", json={"sender": "alice", "recipient": "bob"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Invalid input"}


def test_send_message_empty_content(client) -> None:
    response = client.post("/send_message", json={"sender": "alice", "recipient": "bob", "content": ""})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_empty_conversation(client) -> None:
    response = client.get("/messages", params={"sender": "alice", "recipient": "bob"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
