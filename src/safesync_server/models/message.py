# src/safesync_server/models/message.py
"""Models describing messages relayed between users."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from safesync_server.db.session import Base

from .user import utcnow


class Message(Base):
    """Opaque message blob exchanged between two usernames.

    Content is stored as given; clients encrypt it before upload.
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    recipient: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
