"""Service banner and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from safesync_server.api.dependencies import SettingsDep

router = APIRouter(tags=["system"])


@router.get("/")
async def root(settings: SettingsDep) -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "status": "ok",
        "name": settings.app_name,
        "version": settings.app_version,
        "message": "Welcome to the chat server! Use /register, /login, etc.",
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}
