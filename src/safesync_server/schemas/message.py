"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Schema for relaying a new message."""

    sender: str = Field(..., description="Sending username")
    recipient: str = Field(..., description="Receiving username")
    content: str = Field(..., description="Opaque, client-encrypted content")


class MessageResponse(BaseModel):
    """Schema for stored messages returned by the API."""

    id: int
    sender: str
    recipient: str
    content: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
