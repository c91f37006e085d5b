"""Database handle and session helpers."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from safesync_server.core.errors import ConflictError, InternalError, ServiceError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance.

    Built by ``create_app`` at startup and disposed at shutdown; nothing in
    the package keeps a module-level engine.
    """

    def __init__(self, url: str, *, echo: bool = False, engine: Engine | None = None) -> None:
        self.url = url
        self.engine = engine or self._build_engine(url, echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @staticmethod
    def _build_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            kwargs: dict[str, object] = {"connect_args": {"check_same_thread": False}}
            # In-memory databases only exist per connection; share one.
            if url in {"sqlite://", "sqlite:///:memory:"}:
                kwargs["poolclass"] = StaticPool
            return create_engine(url, echo=echo, **kwargs)
        return create_engine(url, echo=echo, pool_pre_ping=True)

    def create_tables(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        # Ensure model modules are imported so that metadata is populated.
        import safesync_server.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables."""
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        """Return a new session bound to this database."""
        return self.session_factory()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(session: Session, *, conflict_message: str | None = None) -> Iterator[Session]:
    """Run a block as one transaction.

    Commits when the block finishes and rolls back on any exception. Store
    errors are logged and re-raised as ``InternalError``; integrity errors
    become ``ConflictError`` when ``conflict_message`` is given.
    """
    try:
        yield session
        session.commit()
    except ServiceError:
        session.rollback()
        raise
    except IntegrityError as err:
        session.rollback()
        if conflict_message is not None:
            logger.info("Integrity conflict: %s", conflict_message)
            raise ConflictError(conflict_message) from err
        logger.error("Unexpected integrity error: %s", err, exc_info=True)
        raise InternalError("Internal server error") from err
    except SQLAlchemyError as err:
        session.rollback()
        logger.error("Database error: %s", err, exc_info=True)
        raise InternalError("Internal server error") from err
    except BaseException:
        session.rollback()
        raise
