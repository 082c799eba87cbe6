"""Task service: owner-scoped task persistence.

Every statement filters on both the task id and the owner's user id. A task id
on its own never grants access, and a task owned by someone else is reported
exactly like a task that does not exist.
"""

import logging
from typing import Any

import aiosqlite

from organiza.core.db_client import Database
from organiza.core.errors import InvalidInputError, NotFoundError
from organiza.core.logging import log_with_user_context, span
from organiza.domain.create_models import TaskCreate
from organiza.domain.task import Task, TaskPriority, TaskStatus
from organiza.domain.update_models import TaskUpdate


logger = logging.getLogger(__name__)

# Undated tasks sort after every dated one; ties keep creation order.
LIST_ORDER = "due_date IS NULL, due_date ASC, id ASC"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskRepository:
    """CRUD over tasks, always scoped to one owner."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_tasks(
        self,
        owner_id: int,
        *,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """List an owner's tasks by due date, undated last.

        Args:
            owner_id: Authenticated user's id
            status: Only tasks with this status
            priority: Only tasks with this priority
            search: Case-insensitive substring matched against title and description

        Returns:
            Matching tasks, ordered by due date ascending with undated tasks last
        """
        conditions = ["user_id = ?"]
        params: list[Any] = [owner_id]

        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if priority is not None:
            conditions.append("priority = ?")
            params.append(priority.value)
        if search and search.strip():
            pattern = f"%{_escape_like(search.strip().lower())}%"
            conditions.append("(lower(title) LIKE ? ESCAPE '\\' OR lower(coalesce(description, '')) LIKE ? ESCAPE '\\')")
            params.extend([pattern, pattern])

        where_clause = " AND ".join(conditions)
        rows = await self._db.fetch_all(
            f"SELECT * FROM tasks WHERE {where_clause} ORDER BY {LIST_ORDER}",  # noqa: S608 - clauses are fixed strings
            params,
        )
        return [Task(**row) for row in rows]

    async def get(self, owner_id: int, task_id: int) -> Task:
        """Fetch one task.

        Raises:
            NotFoundError: If the task does not exist or belongs to someone else
        """
        row = await self._db.fetch_one("SELECT * FROM tasks WHERE id = ? AND user_id = ?", (task_id, owner_id))
        if row is None:
            raise NotFoundError
        return Task(**row)

    async def create(self, owner_id: int, data: TaskCreate) -> Task:
        """Insert a pending task and return it as persisted."""
        with span("task_service.create"):
            try:
                task_id = await self._db.insert(
                    """
                    INSERT INTO tasks (user_id, title, description, priority, status, due_date)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        owner_id,
                        data.title,
                        data.description,
                        data.effective_priority.value,
                        TaskStatus.PENDING.value,
                        data.due_date.isoformat() if data.due_date else None,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                logger.warning("task_create_rejected", extra={"user_id": owner_id, "error": str(e)})
                raise InvalidInputError from e

            log_with_user_context(logger, "info", "Task created", user_id=owner_id, task_id=task_id)
            return await self.get(owner_id, task_id)

    async def update(self, owner_id: int, task_id: int, data: TaskUpdate) -> None:
        """Replace every mutable field of a task.

        Raises:
            NotFoundError: If no task matched (task id, owner id)
        """
        with span("task_service.update"):
            try:
                changed = await self._db.execute(
                    """
                    UPDATE tasks
                    SET title = ?, description = ?, priority = ?, status = ?, due_date = ?
                    WHERE id = ? AND user_id = ?
                    """,
                    (
                        data.title,
                        data.description,
                        data.priority.value,
                        data.status.value,
                        data.due_date.isoformat() if data.due_date else None,
                        task_id,
                        owner_id,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                logger.warning("task_update_rejected", extra={"user_id": owner_id, "error": str(e)})
                raise InvalidInputError from e

            if changed == 0:
                log_with_user_context(logger, "info", "task_update_missed", user_id=owner_id, task_id=task_id)
                raise NotFoundError

            log_with_user_context(logger, "info", "Task updated", user_id=owner_id, task_id=task_id)

    async def toggle_status(self, owner_id: int, task_id: int) -> Task:
        """Flip a task between pending and done, returning the updated task."""
        with span("task_service.toggle_status"):
            changed = await self._db.execute(
                """
                UPDATE tasks
                SET status = CASE status WHEN ? THEN ? ELSE ? END
                WHERE id = ? AND user_id = ?
                """,
                (
                    TaskStatus.PENDING.value,
                    TaskStatus.DONE.value,
                    TaskStatus.PENDING.value,
                    task_id,
                    owner_id,
                ),
            )
            if changed == 0:
                raise NotFoundError

            task = await self.get(owner_id, task_id)
            log_with_user_context(logger, "info", "Task toggled", user_id=owner_id, task_id=task_id, status=task.status)
            return task

    async def delete(self, owner_id: int, task_id: int) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If no task matched (task id, owner id)
        """
        with span("task_service.delete"):
            deleted = await self._db.execute("DELETE FROM tasks WHERE id = ? AND user_id = ?", (task_id, owner_id))
            if deleted == 0:
                raise NotFoundError

            log_with_user_context(logger, "info", "Task deleted", user_id=owner_id, task_id=task_id)
