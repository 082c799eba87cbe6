"""Update models for database operations."""

from datetime import date

from pydantic import BaseModel, field_validator

from organiza.domain.task import TaskPriority, TaskStatus, clean_title


class TaskUpdate(BaseModel):
    """Full replacement of a task's mutable fields."""

    title: str
    description: str | None = None
    priority: TaskPriority
    status: TaskStatus
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return clean_title(v)
