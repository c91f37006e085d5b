# src/safesync_server/main.py
"""Main entry point for the SafeSync server."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from safesync_server.api import (
    auth_router,
    friends_router,
    messages_router,
    system_router,
    users_router,
)
from safesync_server.core import security
from safesync_server.core.errors import ServiceError
from safesync_server.core.logging import configure_logging
from safesync_server.core.settings import Settings, get_settings
from safesync_server.db.session import Database
from safesync_server.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info("%s on %s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid input"},
    )


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Unhandled database error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def open_database(settings: Settings) -> Database:
    """Connect to the store and create missing tables.

    Any failure here is fatal: it is logged and re-raised so startup aborts.
    """
    try:
        database = Database(settings.database_url, echo=settings.sql_debug)
        database.create_tables()
    except SQLAlchemyError:
        logger.critical("Failed to open database at %s", settings.database_url, exc_info=True)
        raise
    logger.info("Database ready at %s", settings.database_url)
    return database


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-derived settings.
        database: Pre-built store handle (tests pass an in-memory one). When
            omitted the database is opened at startup and disposed at shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_database = app.state.database is None
        if owns_database:
            app.state.database = open_database(settings)
        security.dummy_password_hash(settings.bcrypt_rounds)
        try:
            yield
        finally:
            if owns_database:
                app.state.database.dispose()
                app.state.database = None

    app = FastAPI(
        title=settings.app_name,
        description="Messaging and friendship graph API",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)  # type: ignore[arg-type]

    app.include_router(system_router)
    app.include_router(auth_router, responses=ERROR_RESPONSES)
    app.include_router(friends_router, responses=ERROR_RESPONSES)
    app.include_router(messages_router, responses=ERROR_RESPONSES)
    app.include_router(users_router, responses=ERROR_RESPONSES)
    return app


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "safesync_server.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8080,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
