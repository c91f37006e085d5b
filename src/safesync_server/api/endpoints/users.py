"""User directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from safesync_server.api.dependencies import AccountServiceDep

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[str])
def get_all_usernames(accounts: AccountServiceDep) -> list[str]:
    """Return every registered username."""
    return accounts.list_usernames()
