# tests/test_security.py
"""Tests for password hashing and session token validation."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from safesync_server.core.errors import UnauthorizedError
from safesync_server.core.security import (
    SessionClaims,
    hash_password,
    issue_session,
    resolve_session,
    validate_claims,
    verify_password,
)
from tests.conftest import make_settings

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def test_hash_and_verify_password() -> None:
    hashed = hash_password("pw1", rounds=4)

    assert hashed != "pw1"
    assert verify_password("pw1", hashed) is True
    assert verify_password("pw2", hashed) is False


def test_verify_password_with_malformed_hash() -> None:
    assert verify_password("pw1", "not-a-bcrypt-hash") is False


class TestValidateClaims:
    def test_valid_payload(self) -> None:
        exp = int((NOW + timedelta(hours=1)).timestamp())

        claims = validate_claims({"sub": "alice", "exp": exp}, now=NOW)

        assert claims == SessionClaims(subject="alice", expires_at=datetime.fromtimestamp(exp, tz=UTC))

    @pytest.mark.parametrize(
        "payload",
        [
            {"exp": 2_000_000_000},
            {"sub": "", "exp": 2_000_000_000},
            {"sub": 42, "exp": 2_000_000_000},
            {"sub": "alice"},
            {"sub": "alice", "exp": "tomorrow"},
            {"sub": "alice", "exp": True},
        ],
    )
    def test_malformed_payloads_rejected(self, payload) -> None:
        with pytest.raises(UnauthorizedError):
            validate_claims(payload, now=NOW)

    def test_expired_payload_rejected(self) -> None:
        exp = int((NOW - timedelta(seconds=1)).timestamp())

        with pytest.raises(UnauthorizedError, match="expired"):
            validate_claims({"sub": "alice", "exp": exp}, now=NOW)


class TestSessionTokens:
    def test_round_trip(self) -> None:
        settings = make_settings()

        token = issue_session("alice", settings)
        claims = resolve_session(token, settings)

        assert claims.subject == "alice"
        assert claims.expires_at > datetime.now(UTC)

    def test_expires_after_configured_lifetime(self) -> None:
        settings = make_settings(access_token_expire_minutes=5)
        token = issue_session("alice", settings, now=NOW)

        assert resolve_session(token, settings, now=NOW + timedelta(minutes=4)).subject == "alice"
        with pytest.raises(UnauthorizedError):
            resolve_session(token, settings, now=NOW + timedelta(minutes=6))

    def test_wrong_secret_rejected(self) -> None:
        token = issue_session("alice", make_settings(secret_key="other-secret"))

        with pytest.raises(UnauthorizedError):
            resolve_session(token, make_settings())

    def test_garbage_token_rejected(self) -> None:
        with pytest.raises(UnauthorizedError):
            resolve_session("not.a.jwt", make_settings())

    def test_token_without_subject_rejected(self) -> None:
        settings = make_settings()
        token = jwt.encode({"exp": 2_000_000_000}, settings.secret_key, algorithm=settings.jwt_algorithm)

        with pytest.raises(UnauthorizedError):
            resolve_session(token, settings)
