"""Password hashing and session token utilities."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
from jose import JWTError, jwt

from safesync_server.core.errors import UnauthorizedError
from safesync_server.core.settings import Settings

INVALID_SESSION = "Could not validate credentials"
# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class SessionClaims:
    """Validated contents of a session token."""

    subject: str
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once ``expires_at`` has passed."""
        return (now or datetime.now(UTC)) >= self.expires_at


def hash_password(plaintext: str, rounds: int = 12) -> str:
    """Return a bcrypt hash of ``plaintext``."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")


@lru_cache(maxsize=None)
def dummy_password_hash(rounds: int = 12) -> str:
    """Return a throwaway hash checked against when a login names no user.

    Built once per cost factor and process, so a failed login for an unknown
    user costs one ``checkpw`` just like a wrong password does.
    """
    return hash_password("safesync-dummy", rounds=rounds)


def verify_password(plaintext: str, hashed: str) -> bool:
    """Check ``plaintext`` against a stored bcrypt hash.

    Malformed hashes verify as False instead of raising.
    """
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def validate_claims(payload: Mapping[str, Any], now: datetime | None = None) -> SessionClaims:
    """Turn a decoded token payload into ``SessionClaims``.

    Args:
        payload: Claims decoded from a token whose signature already verified.
        now: Reference instant, defaults to the current UTC time.

    Returns:
        The subject and expiry carried by the token.

    Raises:
        UnauthorizedError: If the subject is missing or blank, the expiry is
            missing or not numeric, or the token has expired.
    """
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise UnauthorizedError(INVALID_SESSION)

    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, int | float):
        raise UnauthorizedError(INVALID_SESSION)

    claims = SessionClaims(
        subject=subject,
        expires_at=datetime.fromtimestamp(exp, tz=UTC),
    )
    if claims.is_expired(now):
        raise UnauthorizedError("Session expired")
    return claims


def issue_session(identity: str, settings: Settings, now: datetime | None = None) -> str:
    """Create a signed session token for ``identity``."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {
        "sub": identity,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    encoded: str = jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)
    return encoded


def resolve_session(token: str, settings: Settings, now: datetime | None = None) -> SessionClaims:
    """Verify a session token and return its claims.

    Expiry is checked by ``validate_claims`` rather than the JWT library so
    the same rule applies however the payload was obtained.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError as err:
        raise UnauthorizedError(INVALID_SESSION) from err
    return validate_claims(payload, now)
