"""Task domain models and enums."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field


MAX_TITLE_LENGTH = 200


class TaskPriority(StrEnum):
    """Task priority, stored as the values the client displays."""

    LOW = "baixa"
    MEDIUM = "média"
    HIGH = "alta"


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pendente"
    DONE = "concluída"

    def toggled(self) -> "TaskStatus":
        return TaskStatus.DONE if self is TaskStatus.PENDING else TaskStatus.PENDING


class Task(BaseModel):
    """Task data transfer object."""

    id: int = Field(..., description="Unique task ID")
    user_id: int = Field(..., description="Owning user ID")
    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Detailed task description")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    due_date: date | None = Field(default=None, description="Due date (ISO format)")
    created_at: str = Field(..., description="Creation timestamp (UTC)")


def clean_title(v: str) -> str:
    """Strip a task title and enforce that it is present and not too long."""
    v = v.strip()
    if not v:
        raise ValueError("Título é obrigatório")
    if len(v) > MAX_TITLE_LENGTH:
        raise ValueError(f"Título muito longo (máximo {MAX_TITLE_LENGTH} caracteres)")
    return v
