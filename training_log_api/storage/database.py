"""Database management with PostgreSQL via asyncpg."""

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from ..errors import DuplicateRecordError, PersistenceError
from ..models import Animal, AnimalCreate, TrainingLog, TrainingLogCreate, User, UserPublic

logger = logging.getLogger(__name__)

# Human-readable messages for unique constraints
_UNIQUE_MESSAGES = {
    "users_email_key": "A user with this email already exists",
}


def new_id() -> str:
    """Generate a record identifier."""
    return uuid.uuid4().hex


def _row_to_training_log(row: asyncpg.Record | dict[str, Any]) -> TrainingLog:
    data = dict(row)
    data["user"] = data.pop("user_id")
    return TrainingLog.model_validate(data)


class Database:
    """Async PostgreSQL database manager using asyncpg.

    Holds one connection pool for the process. Driver errors are translated
    into :class:`PersistenceError` (or :class:`DuplicateRecordError` for
    unique constraint violations) so handlers never see asyncpg types.
    """

    def __init__(
        self,
        db_url: str,
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 60.0,
    ):
        """Initialize database with connection URL."""
        self.db_url = db_url
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """Establish database connection pool and initialize schema."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            self.db_url,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )

        from .schema import INIT_SCHEMA

        async with self._pool.acquire() as conn:
            await conn.execute(INIT_SCHEMA)

        logger.info(f"Database connected: {self.db_url.split('@')[-1]}")  # Don't log password

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database disconnected")

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection, translating driver errors."""
        if not self._pool:
            raise RuntimeError("Database not connected")

        try:
            async with self._pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError as e:
            constraint = getattr(e, "constraint_name", None)
            detail = _UNIQUE_MESSAGES.get(constraint, f"Duplicate record: {e}")
            logger.info(f"Unique constraint violated: {constraint}")
            raise DuplicateRecordError(detail) from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database operation failed: {e}")
            raise PersistenceError(str(e)) from e

    # User operations
    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        profile_picture: str | None = None,
    ) -> User:
        """Create a new user. The password must already be hashed."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO users (id, first_name, last_name, email, password, profile_picture)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING id, first_name, last_name, email, password, profile_picture
                """,
                new_id(),
                first_name,
                last_name,
                email,
                password_hash,
                profile_picture,
            )

        user = User.model_validate(dict(row))
        logger.debug(f"Created user: {user.id}")
        return user

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, first_name, last_name, email, password, profile_picture
                FROM users WHERE id = $1
                """,
                user_id,
            )

        return User.model_validate(dict(row)) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, first_name, last_name, email, password, profile_picture
                FROM users WHERE email = $1
                """,
                email,
            )

        return User.model_validate(dict(row)) if row else None

    async def list_users(self, limit: int = 10, offset: int = 0) -> list[UserPublic]:
        """List users without their password digests."""
        async with self._connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, first_name, last_name, email, profile_picture
                FROM users
                ORDER BY created_at, id
                LIMIT $1 OFFSET $2
                """,
                limit,
                offset,
            )

        return [UserPublic.model_validate(dict(row)) for row in rows]

    async def set_user_profile_picture(self, user_id: str, url: str) -> bool:
        """Point a user's profile picture at a stored image. Returns False if missing."""
        async with self._connection() as conn:
            result = await conn.execute(
                "UPDATE users SET profile_picture = $1 WHERE id = $2", url, user_id
            )

        return _affected(result) > 0

    async def count_users(self) -> int:
        """Count registered users."""
        async with self._connection() as conn:
            count = await conn.fetchval("SELECT COUNT(*) FROM users")

        return count or 0

    # Animal operations
    async def create_animal(self, animal: AnimalCreate, owner: str) -> Animal:
        """Create a new animal owned by ``owner``."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO animals (id, name, hours_trained, owner, date_of_birth, profile_picture)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING id, name, hours_trained, owner, date_of_birth, profile_picture
                """,
                new_id(),
                animal.name,
                animal.hours_trained,
                owner,
                animal.date_of_birth,
                animal.profile_picture,
            )

        created = Animal.model_validate(dict(row))
        logger.debug(f"Created animal: {created.id}")
        return created

    async def get_animal(self, animal_id: str) -> Animal | None:
        """Get animal by ID."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, name, hours_trained, owner, date_of_birth, profile_picture
                FROM animals WHERE id = $1
                """,
                animal_id,
            )

        return Animal.model_validate(dict(row)) if row else None

    async def list_animals(self, limit: int = 10, offset: int = 0) -> list[Animal]:
        """List animals."""
        async with self._connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, name, hours_trained, owner, date_of_birth, profile_picture
                FROM animals
                ORDER BY created_at, id
                LIMIT $1 OFFSET $2
                """,
                limit,
                offset,
            )

        return [Animal.model_validate(dict(row)) for row in rows]

    async def set_animal_profile_picture(self, animal_id: str, url: str) -> bool:
        """Point an animal's profile picture at a stored image. Returns False if missing."""
        async with self._connection() as conn:
            result = await conn.execute(
                "UPDATE animals SET profile_picture = $1 WHERE id = $2", url, animal_id
            )

        return _affected(result) > 0

    # Training log operations
    async def create_training_log(self, log: TrainingLogCreate, user: str) -> TrainingLog:
        """Record a training session for ``user``."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO training_logs (
                    id, date, description, hours, animal, user_id, training_log_video
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                RETURNING id, date, description, hours, animal, user_id, training_log_video
                """,
                new_id(),
                log.date,
                log.description,
                log.hours,
                log.animal,
                user,
                log.training_log_video,
            )

        created = _row_to_training_log(row)
        logger.debug(f"Created training log: {created.id}")
        return created

    async def get_training_log(self, log_id: str) -> TrainingLog | None:
        """Get training log by ID."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, date, description, hours, animal, user_id, training_log_video
                FROM training_logs WHERE id = $1
                """,
                log_id,
            )

        return _row_to_training_log(row) if row else None

    async def list_training_logs(self, limit: int = 10, offset: int = 0) -> list[TrainingLog]:
        """List training logs."""
        async with self._connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, date, description, hours, animal, user_id, training_log_video
                FROM training_logs
                ORDER BY created_at, id
                LIMIT $1 OFFSET $2
                """,
                limit,
                offset,
            )

        return [_row_to_training_log(row) for row in rows]

    async def set_training_log_video(self, log_id: str, url: str) -> bool:
        """Attach a stored video to a training log. Returns False if missing."""
        async with self._connection() as conn:
            result = await conn.execute(
                "UPDATE training_logs SET training_log_video = $1 WHERE id = $2", url, log_id
            )

        return _affected(result) > 0

    # Maintenance
    async def clear_all(self) -> dict[str, int]:
        """Delete every record from all collections."""
        from .schema import COLLECTION_TABLES

        deleted: dict[str, int] = {}
        async with self._connection() as conn:
            async with conn.transaction():
                for table in COLLECTION_TABLES:
                    result = await conn.execute(f"DELETE FROM {table}")
                    deleted[table] = _affected(result)

        logger.info(f"Cleared collections: {deleted}")
        return deleted


def _affected(result: str | None) -> int:
    """Extract the row count from a status string such as ``UPDATE 1``."""
    return int(result.split()[-1]) if result else 0
