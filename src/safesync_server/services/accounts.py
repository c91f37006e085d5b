"""Registration, credential checks and public key lookup."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from safesync_server.core import security
from safesync_server.core.errors import InvalidInputError, NotFoundError, UnauthorizedError
from safesync_server.db.session import unit_of_work
from safesync_server.models import User
from safesync_server.repositories import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AccountService:
    """Service owning user creation and authentication."""

    def __init__(self, session: Session, *, bcrypt_rounds: int = 12) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.bcrypt_rounds = bcrypt_rounds

    def register(
        self,
        username: str,
        password: str,
        public_keys: Sequence[str | None] = (),
    ) -> User:
        """Create a user with a hashed password.

        Raises:
            InvalidInputError: If username or password is empty, or more than
                four public keys are supplied.
            ConflictError: If the username is already taken.
        """
        if not username or not username.strip() or not password:
            raise InvalidInputError("Username and password must not be empty")
        if len(public_keys) > 4:
            raise InvalidInputError("At most four public keys are allowed")
        if len(password.encode("utf-8")) > security.MAX_PASSWORD_BYTES:
            raise InvalidInputError("Password is too long")

        password_hash = security.hash_password(password, rounds=self.bcrypt_rounds)
        with unit_of_work(self.session, conflict_message="User already exists"):
            user = self.users.create(
                username=username,
                password_hash=password_hash,
                public_keys=public_keys,
            )
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def verify_credentials(self, username: str, password: str) -> User:
        """Return the user if the password matches.

        Unknown users and wrong passwords raise the same error, and a dummy
        hash comparison keeps the two paths similar in timing.
        """
        if not username or not password:
            raise InvalidInputError("Username and password must not be empty")

        with unit_of_work(self.session):
            user = self.users.get_by_username(username)

        if user is None:
            security.verify_password(password, security.dummy_password_hash(self.bcrypt_rounds))
            logger.info("Login failed for %s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not security.verify_password(password, user.password_hash):
            logger.info("Login failed for %s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

    def get_public_keys(self, username: str) -> dict[str, str]:
        """Return the four public key slots for ``username``."""
        with unit_of_work(self.session):
            user = self.users.get_by_username(username) if username else None
        if user is None:
            raise NotFoundError("User not found")
        return user.public_keys

    def list_usernames(self) -> list[str]:
        """Return every registered username."""
        with unit_of_work(self.session):
            return self.users.list_usernames()
