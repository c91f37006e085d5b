# src/safesync_server/api/endpoints/auth.py
"""Registration, login and public key endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from safesync_server.api.dependencies import AccountServiceDep, SettingsDep
from safesync_server.core.security import issue_session
from safesync_server.schemas.user import (
    IdentitySummary,
    LoginRequest,
    LoginResponse,
    PublicKeysResponse,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
def register_user(payload: RegisterRequest, accounts: AccountServiceDep) -> UserResponse:
    """Create an account; the password is stored only as a bcrypt hash."""
    user = accounts.register(payload.username, payload.password, payload.public_keys)
    return UserResponse.from_user(user)


@router.post(
    "/login",
    summary="Authenticate with username and password",
    response_model=LoginResponse,
)
def login_user(
    payload: LoginRequest,
    accounts: AccountServiceDep,
    settings: SettingsDep,
) -> LoginResponse:
    """Check credentials and issue a session token."""
    user = accounts.verify_credentials(payload.username, payload.password)
    return LoginResponse(
        data=IdentitySummary.model_validate(user),
        access_token=issue_session(user.username, settings),
    )


@router.get("/keys", summary="Fetch a user's public keys", response_model=PublicKeysResponse)
def get_public_keys(
    accounts: AccountServiceDep,
    username: str = Query(""),
) -> PublicKeysResponse:
    """Return all four public key slots for ``username``."""
    return PublicKeysResponse(**accounts.get_public_keys(username))
