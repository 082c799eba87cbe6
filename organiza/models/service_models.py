"""Pydantic models for service layer return types.

These models provide type safety at service boundaries, converting database
dictionaries into typed objects with validation.
"""

from pydantic import BaseModel, ConfigDict, Field

from organiza.domain.task import TaskPriority
from organiza.domain.user import User


class LoginResponse(BaseModel):
    """Session token plus the public user it identifies."""

    token: str
    user: User


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class PriorityCount(BaseModel):
    """Number of tasks with a given priority."""

    priority: TaskPriority
    count: int


class WeeklyCount(BaseModel):
    """Number of completed tasks created in an ISO week (label ``YYYY-Www``)."""

    week: str
    count: int


class DashboardStats(BaseModel):
    """Aggregate statistics for one user's tasks."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    pending: int
    priority_stats: list[PriorityCount] = Field(default_factory=list, alias="priorityStats")
    weekly_stats: list[WeeklyCount] = Field(default_factory=list, alias="weeklyStats")
    completion_rate: int = Field(default=0, alias="completionRate")


class UserTaskCount(BaseModel):
    """A user with the number of tasks they own (admin listing)."""

    id: int
    name: str
    email: str
    created_at: str | None = None
    task_count: int
