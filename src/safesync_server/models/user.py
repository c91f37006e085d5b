# src/safesync_server/models/user.py
"""SQLAlchemy model for registered user identities."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from safesync_server.db.session import Base

PUBLIC_KEY_SLOTS = 4


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class User(Base):
    """Registered account with up to four opaque public keys.

    Usernames are case-sensitive and never change after registration.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    public_key_1: Mapped[str | None] = mapped_column(Text, nullable=True)
    public_key_2: Mapped[str | None] = mapped_column(Text, nullable=True)
    public_key_3: Mapped[str | None] = mapped_column(Text, nullable=True)
    public_key_4: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @property
    def public_keys(self) -> dict[str, str]:
        """Return the key slots in wire form (``publickey1`` .. ``publickey4``)."""
        return {
            f"publickey{slot}": getattr(self, f"public_key_{slot}") or ""
            for slot in range(1, PUBLIC_KEY_SLOTS + 1)
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
