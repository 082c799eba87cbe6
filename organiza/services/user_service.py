"""User service: credential storage, registration and login."""

import logging

import aiosqlite

from organiza.core.config import settings
from organiza.core.db_client import Database
from organiza.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError, StorageError
from organiza.core.logging import log_with_user_context, span
from organiza.core.security import hash_password_async, verify_password_async
from organiza.domain.user import User, UserCreate, UserRecord, normalize_email
from organiza.models.service_models import UserTaskCount


logger = logging.getLogger(__name__)

# Stand-in hashes checked for unknown emails, one per cost factor, shared by every repository
_unknown_user_hashes: dict[int, str] = {}


async def _unknown_user_hash(rounds: int) -> str:
    if rounds not in _unknown_user_hashes:
        _unknown_user_hashes[rounds] = await hash_password_async("unknown-user", rounds=rounds)
    return _unknown_user_hashes[rounds]


class UserRepository:
    """Persists users and their password hashes."""

    def __init__(self, db: Database, *, bcrypt_rounds: int | None = None) -> None:
        self._db = db
        self._bcrypt_rounds = bcrypt_rounds or settings.bcrypt_rounds

    async def _burn_verify(self, password: str) -> None:
        # Unknown emails still cost exactly one bcrypt check, like a wrong password
        await verify_password_async(password, await _unknown_user_hash(self._bcrypt_rounds))

    async def register(self, data: UserCreate) -> User:
        """Create a user with a salted bcrypt hash of the password.

        Args:
            data: Validated registration payload

        Returns:
            The new user (id, name, email)

        Raises:
            DuplicateEmailError: If the email is already registered
            StorageError: If the insert fails for any other reason
        """
        with span("user_service.register"):
            hashed = await hash_password_async(data.password, rounds=self._bcrypt_rounds)

            try:
                user_id = await self._db.insert(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    (data.name, data.email, hashed),
                )
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e) and "users.email" in str(e):
                    logger.warning("register_duplicate_email")
                    raise DuplicateEmailError from e
                logger.error("register_failed", extra={"error": str(e)})
                raise StorageError("Erro ao criar usuário") from e

            log_with_user_context(logger, "info", "User registered", user_id=user_id)
            return User(id=user_id, name=data.name, email=data.email)

    async def find_by_email(self, email: str) -> UserRecord | None:
        """Return the stored user (with hash) for an email, or None."""
        try:
            normalized = normalize_email(email)
        except ValueError:
            return None

        row = await self._db.fetch_one("SELECT * FROM users WHERE email = ?", (normalized,))
        return UserRecord(**row) if row else None

    async def get_by_id(self, user_id: int) -> User | None:
        """Return the public user for an id, or None."""
        row = await self._db.fetch_one("SELECT id, name, email FROM users WHERE id = ?", (user_id,))
        return User(**row) if row else None

    async def authenticate(self, email: str, password: str) -> User:
        """Check a login attempt.

        Raises:
            InvalidCredentialsError: For an unknown email and a wrong password alike
        """
        with span("user_service.authenticate"):
            record = await self.find_by_email(email)

            if record is None:
                await self._burn_verify(password)
                logger.info("login_rejected", extra={"reason": "invalid_credentials"})
                raise InvalidCredentialsError

            if not await verify_password_async(password, record.password):
                log_with_user_context(logger, "info", "login_rejected", user_id=record.id, reason="invalid_credentials")
                raise InvalidCredentialsError

            log_with_user_context(logger, "info", "login_succeeded", user_id=record.id)
            return record.to_public()

    async def delete(self, user_id: int) -> None:
        """Delete a user; their tasks go with them through the foreign key cascade.

        Raises:
            NotFoundError: If no such user exists
        """
        with span("user_service.delete"):
            deleted = await self._db.execute("DELETE FROM users WHERE id = ?", (user_id,))
            if deleted == 0:
                raise NotFoundError("Usuário não encontrado")
            log_with_user_context(logger, "info", "User deleted", user_id=user_id)

    async def list_with_task_counts(self) -> list[UserTaskCount]:
        """List every user with the number of tasks they own."""
        rows = await self._db.fetch_all(
            """
            SELECT u.id, u.name, u.email, u.created_at, COUNT(t.id) AS task_count
            FROM users u
            LEFT JOIN tasks t ON t.user_id = u.id
            GROUP BY u.id
            ORDER BY u.id
            """
        )
        return [UserTaskCount(**row) for row in rows]
