"""Domain models and DTOs."""

from organiza.domain.create_models import TaskCreate
from organiza.domain.task import Task, TaskPriority, TaskStatus
from organiza.domain.update_models import TaskUpdate
from organiza.domain.user import AuthContext, LoginRequest, User, UserCreate, UserRecord


__all__ = [
    "AuthContext",
    "LoginRequest",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "User",
    "UserCreate",
    "UserRecord",
]
