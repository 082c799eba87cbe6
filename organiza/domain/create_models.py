"""Pydantic models for creating records in database."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from organiza.domain.task import TaskPriority, clean_title


class TaskCreate(BaseModel):
    """Payload for creating a task. Status always starts as pending."""

    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Detailed task description")
    priority: TaskPriority | None = Field(default=None, description="Task priority (defaults to média)")
    due_date: date | None = Field(default=None, description="Due date (ISO format)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return clean_title(v)

    @property
    def effective_priority(self) -> TaskPriority:
        return self.priority or TaskPriority.MEDIUM
