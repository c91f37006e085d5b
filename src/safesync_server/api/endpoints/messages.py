# src/safesync_server/api/endpoints/messages.py
"""Message relay endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from safesync_server.api.dependencies import MessageServiceDep, SessionClaimsDep, ensure_actor
from safesync_server.schemas.message import MessageCreate, MessageResponse

router = APIRouter(tags=["messages"])


@router.post("/send_message")
def send_message(
    message_data: MessageCreate,
    messages: MessageServiceDep,
    claims: SessionClaimsDep,
) -> dict[str, Any]:
    """Store an opaque message for ``recipient``."""
    ensure_actor(claims, message_data.sender)
    message = messages.send_message(
        message_data.sender,
        message_data.recipient,
        message_data.content,
    )
    return {"status": "Message sent", "id": message.id}


@router.get("/messages", response_model=list[MessageResponse])
def get_messages(
    messages: MessageServiceDep,
    sender: str = Query(""),
    recipient: str = Query(""),
) -> list[MessageResponse]:
    """Return messages exchanged between ``sender`` and ``recipient`` in either direction."""
    return [
        MessageResponse.model_validate(message)
        for message in messages.get_messages(sender, recipient)
    ]
