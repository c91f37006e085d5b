# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from safesync_server.api.dependencies import ensure_actor, get_session_claims
from safesync_server.core.errors import UnauthorizedError
from safesync_server.core.security import issue_session
from tests.conftest import make_settings


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetSessionClaims:
    """Test resolving the optional bearer token."""

    def test_no_credentials_when_not_enforced(self):
        assert get_session_claims(None, make_settings()) is None

    def test_no_credentials_when_enforced(self):
        with pytest.raises(UnauthorizedError):
            get_session_claims(None, make_settings(enforce_sessions=True))

    def test_valid_token(self):
        settings = make_settings()
        claims = get_session_claims(_bearer(issue_session("alice", settings)), settings)

        assert claims is not None
        assert claims.subject == "alice"

    def test_invalid_token(self):
        with pytest.raises(UnauthorizedError):
            get_session_claims(_bearer("garbage"), make_settings())


class TestEnsureActor:
    """Test matching the acting user against the session."""

    def test_anonymous_requests_pass(self):
        ensure_actor(None, "alice")

    def test_matching_subject_passes(self):
        settings = make_settings()
        claims = get_session_claims(_bearer(issue_session("alice", settings)), settings)
        ensure_actor(claims, "alice")

    def test_mismatched_subject_rejected(self):
        settings = make_settings()
        claims = get_session_claims(_bearer(issue_session("alice", settings)), settings)

        with pytest.raises(UnauthorizedError):
            ensure_actor(claims, "bob")
