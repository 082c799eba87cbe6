from organiza.services.session_service import SessionIssuer
from organiza.services.stats_service import StatsService
from organiza.services.task_service import TaskRepository
from organiza.services.user_service import UserRepository


__all__ = [
    "SessionIssuer",
    "StatsService",
    "TaskRepository",
    "UserRepository",
]
