"""Unit tests for stats_service module."""

import pytest

from organiza.domain.create_models import TaskCreate
from organiza.domain.task import TaskPriority, TaskStatus
from organiza.models.service_models import DashboardStats, WeeklyCount
from organiza.services.stats_service import StatsService, iso_week_label


@pytest.fixture
async def owner(user_factory):
    return await user_factory(name="Ana", email="ana@x.com")


async def _insert_task(database, owner_id: int, created_at: str, status: TaskStatus = TaskStatus.DONE) -> int:
    return await database.insert(
        "INSERT INTO tasks (user_id, title, status, created_at) VALUES (?, ?, ?, ?)",
        (owner_id, f"task {created_at}", status.value, created_at),
    )


@pytest.mark.unit
class TestIsoWeekLabel:
    """Tests for iso_week_label."""

    def test_regular_week(self):
        assert iso_week_label("2026-02-16 09:30:00") == "2026-W08"

    def test_zero_padded(self):
        assert iso_week_label("2026-01-05 00:00:00") == "2026-W02"

    def test_early_january_belongs_to_previous_iso_year(self):
        assert iso_week_label("2021-01-01 12:00:00") == "2020-W53"

    def test_late_december_belongs_to_next_iso_year(self):
        assert iso_week_label("2025-12-29 08:00:00") == "2026-W01"


@pytest.mark.unit
class TestDashboardStats:
    """Tests for StatsService.get_dashboard_stats."""

    async def test_no_tasks(self, stats_service, owner):
        stats = await stats_service.get_dashboard_stats(owner.id)

        assert stats == DashboardStats(total=0, completed=0, pending=0, priority_stats=[], weekly_stats=[], completion_rate=0)

    async def test_counts_and_completion_rate(self, stats_service, task_repository, owner):
        first = await task_repository.create(owner.id, TaskCreate(title="one", priority=TaskPriority.HIGH))
        await task_repository.create(owner.id, TaskCreate(title="two", priority=TaskPriority.HIGH))
        await task_repository.create(owner.id, TaskCreate(title="three", priority=TaskPriority.LOW))
        await task_repository.toggle_status(owner.id, first.id)

        stats = await stats_service.get_dashboard_stats(owner.id)

        assert stats.total == 3
        assert stats.completed == 1
        assert stats.pending == 2
        assert stats.completed + stats.pending == stats.total
        assert stats.completion_rate == 33

    async def test_completion_rate_rounds_half_up(self, stats_service, task_repository, owner):
        created = [await task_repository.create(owner.id, TaskCreate(title=f"t{i}")) for i in range(8)]
        for task in created[:5]:
            await task_repository.toggle_status(owner.id, task.id)

        stats = await stats_service.get_dashboard_stats(owner.id)

        # 5 / 8 = 62.5%
        assert stats.completion_rate == 63

    async def test_priority_breakdown_omits_empty_priorities(self, stats_service, task_repository, owner):
        await task_repository.create(owner.id, TaskCreate(title="a", priority=TaskPriority.HIGH))
        await task_repository.create(owner.id, TaskCreate(title="b", priority=TaskPriority.HIGH))
        await task_repository.create(owner.id, TaskCreate(title="c"))

        breakdown = await stats_service.priority_breakdown(owner.id)

        assert {item.priority: item.count for item in breakdown} == {TaskPriority.HIGH: 2, TaskPriority.MEDIUM: 1}

    async def test_stats_are_per_owner(self, stats_service, task_repository, owner, user_factory):
        other = await user_factory()
        await task_repository.create(owner.id, TaskCreate(title="mine"))
        theirs = await task_repository.create(other.id, TaskCreate(title="theirs"))
        await task_repository.toggle_status(other.id, theirs.id)

        stats = await stats_service.get_dashboard_stats(owner.id)

        assert stats.total == 1
        assert stats.completed == 0
        assert stats.weekly_stats == []

    async def test_serialized_field_names(self, stats_service, owner):
        stats = await stats_service.get_dashboard_stats(owner.id)

        payload = stats.model_dump(by_alias=True)

        assert set(payload) == {"total", "completed", "pending", "priorityStats", "weeklyStats", "completionRate"}


@pytest.mark.unit
class TestWeeklyStats:
    """Tests for the completed-per-week series."""

    async def test_keeps_four_most_recent_weeks_newest_first(self, database, stats_service, owner):
        for created_at in (
            "2026-01-05 10:00:00",
            "2026-01-12 10:00:00",
            "2026-01-19 10:00:00",
            "2026-01-20 18:00:00",
            "2026-01-26 10:00:00",
            "2026-02-02 10:00:00",
        ):
            await _insert_task(database, owner.id, created_at)
        await _insert_task(database, owner.id, "2026-02-03 10:00:00", TaskStatus.PENDING)

        weekly = await stats_service.weekly_completed(owner.id)

        assert weekly == [
            WeeklyCount(week="2026-W06", count=1),
            WeeklyCount(week="2026-W05", count=1),
            WeeklyCount(week="2026-W04", count=2),
            WeeklyCount(week="2026-W03", count=1),
        ]

    async def test_weeks_without_completions_are_skipped(self, database, stats_service, owner):
        await _insert_task(database, owner.id, "2026-03-02 10:00:00")
        await _insert_task(database, owner.id, "2026-05-04 10:00:00")

        weekly = await stats_service.weekly_completed(owner.id)

        assert [item.week for item in weekly] == ["2026-W19", "2026-W10"]

    async def test_year_boundary_orders_correctly(self, database, stats_service, owner):
        await _insert_task(database, owner.id, "2025-12-22 10:00:00")
        await _insert_task(database, owner.id, "2026-01-07 10:00:00")

        weekly = await stats_service.weekly_completed(owner.id)

        assert [item.week for item in weekly] == ["2026-W02", "2025-W52"]

    async def test_custom_window(self, database, owner):
        for created_at in ("2026-01-05 10:00:00", "2026-01-12 10:00:00", "2026-01-19 10:00:00"):
            await _insert_task(database, owner.id, created_at)

        weekly = await StatsService(database, weeks=2).weekly_completed(owner.id)

        assert [item.week for item in weekly] == ["2026-W04", "2026-W03"]

    def test_chronological(self):
        weekly = [WeeklyCount(week="2026-W06", count=1), WeeklyCount(week="2026-W05", count=3)]

        assert StatsService.chronological(weekly) == [
            WeeklyCount(week="2026-W05", count=3),
            WeeklyCount(week="2026-W06", count=1),
        ]
        assert weekly[0].week == "2026-W06"
