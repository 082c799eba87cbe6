"""SQLite database client wrapper shared by the repositories."""

import logging
from pathlib import Path
from typing import Any

import aiosqlite

from organiza.core.errors import StorageError


logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

Params = tuple[Any, ...] | list[Any]


def resolve_db_path(db_path: str) -> str:
    """Resolve a database path, leaving the in-memory marker untouched."""
    if db_path == MEMORY_PATH:
        return db_path
    return str(Path(db_path).resolve())


def _row_to_dict(cursor: aiosqlite.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row, strict=True))


class Database:
    """A single aiosqlite connection opened at startup and shared by all requests.

    Integrity violations (unique, check, foreign key) are re-raised as
    ``aiosqlite.IntegrityError`` so repositories can map them to domain errors.
    Every other driver failure becomes ``StorageError``.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            msg = "Database is not connected. Call connect() first."
            raise StorageError(msg)
        return self._conn

    async def connect(self) -> None:
        """Open the connection and apply connection-level pragmas."""
        if self._conn is not None:
            return

        try:
            if self.db_path != MEMORY_PATH:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            conn = await aiosqlite.connect(self.db_path)
            await conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != MEMORY_PATH:
                await conn.execute("PRAGMA journal_mode = WAL")
        except aiosqlite.Error as e:
            logger.error("sqlite_connect_failed", extra={"db_path": self.db_path, "error": str(e)})
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

        self._conn = conn
        logger.info("Opened SQLite connection", extra={"db_path": self.db_path})

    async def close(self) -> None:
        """Close the connection if open."""
        if self._conn is None:
            return

        try:
            await self._conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": self.db_path})
        except aiosqlite.Error as e:
            logger.warning("Error closing SQLite connection", extra={"error": str(e), "db_path": self.db_path})
        finally:
            self._conn = None

    async def execute(self, query: str, params: Params = ()) -> int:
        """Run a write statement, commit, and return the number of affected rows."""
        try:
            cursor = await self.connection.execute(query, params)
            await self.connection.commit()
            return cursor.rowcount
        except aiosqlite.IntegrityError:
            await self.connection.rollback()
            raise
        except aiosqlite.Error as e:
            logger.error("execute_failed", extra={"query": query, "error": str(e)})
            raise StorageError(f"Failed to execute statement: {e}") from e

    async def insert(self, query: str, params: Params = ()) -> int:
        """Run an INSERT, commit, and return the new row id."""
        try:
            cursor = await self.connection.execute(query, params)
            await self.connection.commit()
        except aiosqlite.IntegrityError:
            await self.connection.rollback()
            raise
        except aiosqlite.Error as e:
            logger.error("insert_failed", extra={"query": query, "error": str(e)})
            raise StorageError(f"Failed to insert record: {e}") from e

        if cursor.lastrowid is None:
            raise StorageError("Insert did not return a row id")
        return cursor.lastrowid

    async def fetch_one(self, query: str, params: Params = ()) -> dict[str, Any] | None:
        """Return the first row of a query as a dict, or None."""
        try:
            cursor = await self.connection.execute(query, params)
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error("fetch_one_failed", extra={"query": query, "error": str(e)})
            raise StorageError(f"Failed to fetch record: {e}") from e

        if row is None:
            return None
        return _row_to_dict(cursor, row)

    async def fetch_all(self, query: str, params: Params = ()) -> list[dict[str, Any]]:
        """Return every row of a query as a list of dicts."""
        try:
            cursor = await self.connection.execute(query, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error("fetch_all_failed", extra={"query": query, "error": str(e)})
            raise StorageError(f"Failed to fetch records: {e}") from e

        return [_row_to_dict(cursor, row) for row in rows]

    async def fetch_value(self, query: str, params: Params = ()) -> Any:
        """Return the first column of the first row, or None."""
        row = await self.fetch_one(query, params)
        if row is None:
            return None
        return next(iter(row.values()))

    async def executescript(self, script: str) -> None:
        """Run a multi-statement script (schema setup)."""
        try:
            await self.connection.executescript(script)
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error("executescript_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to run script: {e}") from e
