"""SQLite schema management (code-first approach)."""

import logging

from organiza.core.db_client import Database
from organiza.domain.task import TaskPriority, TaskStatus


logger = logging.getLogger(__name__)


# Central list of all tables in the schema, in dependency order
TABLES = ["users", "tasks"]


def _quoted(values: list[str]) -> str:
    return ", ".join(f"'{value}'" for value in values)


def get_table_schema(table_name: str) -> str:
    """Return the CREATE statements for a table."""
    priorities = _quoted([p.value for p in TaskPriority])
    statuses = _quoted([s.value for s in TaskStatus])

    schemas = {
        "users": """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT UNIQUE NOT NULL,
                password TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """,
        "tasks": f"""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                priority TEXT NOT NULL CHECK(priority IN ({priorities})) DEFAULT '{TaskPriority.MEDIUM.value}',
                status TEXT NOT NULL CHECK(status IN ({statuses})) DEFAULT '{TaskStatus.PENDING.value}',
                due_date DATE,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
            );
            CREATE INDEX IF NOT EXISTS idx_tasks_user_id ON tasks (user_id);
        """,
    }
    return schemas[table_name]


async def init_db(db: Database) -> None:
    """Create every table that does not exist yet."""
    for table in TABLES:
        await db.executescript(get_table_schema(table))
    logger.info("Schema initialized", extra={"tables": TABLES, "db_path": db.db_path})
