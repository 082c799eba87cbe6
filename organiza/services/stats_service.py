"""Stats service for the dashboard.

Everything is computed from the tasks table on each call; nothing is cached.

Key Concepts:
- Completion rate: completed tasks as a rounded percentage of all tasks, 0 when
  the user has none.
- Weekly stats: completed tasks grouped by the ISO week of their creation
  timestamp (label ``YYYY-Www``). Only weeks with at least one completion
  appear, limited to the most recent ``WEEKLY_STATS_WEEKS`` of them, most
  recent first. Charts that need oldest-first use ``chronological()``.
"""

import logging
import math
from collections import Counter
from datetime import datetime

from organiza.core.config import constants
from organiza.core.db_client import Database
from organiza.core.logging import span
from organiza.domain.task import TaskStatus
from organiza.models.service_models import DashboardStats, PriorityCount, WeeklyCount


logger = logging.getLogger(__name__)


def iso_week_label(timestamp: str) -> str:
    """Return the ISO week label (e.g. ``2026-W07``) for a stored timestamp."""
    year, week, _ = datetime.fromisoformat(timestamp).isocalendar()
    return f"{year}-W{week:02d}"


class StatsService:
    """Aggregates one user's tasks into dashboard statistics."""

    def __init__(self, db: Database, *, weeks: int = constants.WEEKLY_STATS_WEEKS) -> None:
        self._db = db
        self._weeks = weeks

    async def count(self, owner_id: int, status: TaskStatus | None = None) -> int:
        """Count an owner's tasks, optionally with a given status."""
        if status is None:
            value = await self._db.fetch_value("SELECT COUNT(*) AS count FROM tasks WHERE user_id = ?", (owner_id,))
        else:
            value = await self._db.fetch_value(
                "SELECT COUNT(*) AS count FROM tasks WHERE user_id = ? AND status = ?",
                (owner_id, status.value),
            )
        return int(value or 0)

    async def priority_breakdown(self, owner_id: int) -> list[PriorityCount]:
        """Count tasks per priority; priorities with no tasks are left out."""
        rows = await self._db.fetch_all(
            """
            SELECT priority, COUNT(*) AS count
            FROM tasks
            WHERE user_id = ?
            GROUP BY priority
            ORDER BY priority
            """,
            (owner_id,),
        )
        return [PriorityCount(**row) for row in rows]

    async def weekly_completed(self, owner_id: int) -> list[WeeklyCount]:
        """Completed tasks per ISO week of creation, most recent week first."""
        rows = await self._db.fetch_all(
            "SELECT created_at FROM tasks WHERE user_id = ? AND status = ? AND created_at IS NOT NULL",
            (owner_id, TaskStatus.DONE.value),
        )
        per_week = Counter(iso_week_label(row["created_at"]) for row in rows)
        recent = sorted(per_week.items(), reverse=True)[: self._weeks]
        return [WeeklyCount(week=week, count=count) for week, count in recent]

    @staticmethod
    def chronological(weekly: list[WeeklyCount]) -> list[WeeklyCount]:
        """Oldest-first view of ``weekly_completed`` output."""
        return list(reversed(weekly))

    async def get_dashboard_stats(self, owner_id: int) -> DashboardStats:
        """Build the full stats payload for one user."""
        with span("stats_service.get_dashboard_stats"):
            total = await self.count(owner_id)
            completed = await self.count(owner_id, TaskStatus.DONE)
            pending = await self.count(owner_id, TaskStatus.PENDING)

            completion_rate = math.floor(completed / total * 100 + 0.5) if total > 0 else 0

            stats = DashboardStats(
                total=total,
                completed=completed,
                pending=pending,
                priority_stats=await self.priority_breakdown(owner_id),
                weekly_stats=await self.weekly_completed(owner_id),
                completion_rate=completion_rate,
            )

            logger.info(
                "Computed dashboard stats",
                extra={"user_id": owner_id, "total": total, "completed": completed},
            )
            return stats
