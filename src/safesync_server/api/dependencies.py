"""Shared API dependencies for sessions, services and authentication."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from safesync_server.core.errors import UnauthorizedError
from safesync_server.core.security import SessionClaims, resolve_session
from safesync_server.core.settings import Settings
from safesync_server.db.session import get_db
from safesync_server.services import AccountService, FriendshipService, MessageService

# Bearer scheme; a missing header is allowed and handled by ``get_session_claims``.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running app was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_session_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: SettingsDep,
) -> SessionClaims | None:
    """Resolve the caller's session token if one was sent.

    Returns:
        The validated claims, or None when no token was supplied and sessions
        are not enforced.

    Raises:
        UnauthorizedError: If the token is invalid or expired, or missing
            while ``enforce_sessions`` is on.
    """
    if credentials is None or not credentials.credentials:
        if settings.enforce_sessions:
            raise UnauthorizedError("Authorization header missing")
        return None
    return resolve_session(credentials.credentials, settings)


SessionClaimsDep = Annotated[SessionClaims | None, Depends(get_session_claims)]


def ensure_actor(claims: SessionClaims | None, actor: str) -> None:
    """Reject requests acting on behalf of someone other than the session subject."""
    if claims is not None and claims.subject != actor:
        raise UnauthorizedError("Session does not match the acting user")


def get_account_service(db: SessionDep, settings: SettingsDep) -> AccountService:
    return AccountService(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_friendship_service(db: SessionDep, settings: SettingsDep) -> FriendshipService:
    return FriendshipService(db, require_registered_users=settings.require_registered_users)


def get_message_service(db: SessionDep) -> MessageService:
    return MessageService(db)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
FriendshipServiceDep = Annotated[FriendshipService, Depends(get_friendship_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
