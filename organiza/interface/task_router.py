"""Task CRUD routes. Every route requires a verified session."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from organiza.core.errors import InvalidInputError, NotFoundError, StorageError
from organiza.domain.create_models import TaskCreate
from organiza.domain.task import Task, TaskPriority, TaskStatus
from organiza.domain.update_models import TaskUpdate
from organiza.interface.dependencies import CurrentUser, get_task_repository, raise_http_error
from organiza.models.service_models import MessageResponse
from organiza.services.task_service import TaskRepository


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

Tasks = Annotated[TaskRepository, Depends(get_task_repository)]

# SQLite INTEGER PRIMARY KEY range; larger ids cannot be bound as parameters
TaskId = Annotated[int, Path(ge=1, le=2**63 - 1)]


@router.get("")
async def list_tasks(
    current_user: CurrentUser,
    tasks: Tasks,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: TaskPriority | None = None,
    q: Annotated[str | None, Query(max_length=200)] = None,
) -> list[Task]:
    """List the caller's tasks by due date (undated last), with optional filters."""
    try:
        return await tasks.list_tasks(current_user.id, status=status_filter, priority=priority, search=q)
    except StorageError as e:
        raise_http_error(e)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate, current_user: CurrentUser, tasks: Tasks) -> Task:
    """Create a pending task (priority defaults to média)."""
    try:
        return await tasks.create(current_user.id, payload)
    except (InvalidInputError, StorageError) as e:
        raise_http_error(e)


@router.get("/{task_id}")
async def get_task(task_id: TaskId, current_user: CurrentUser, tasks: Tasks) -> Task:
    """Return one of the caller's tasks."""
    try:
        return await tasks.get(current_user.id, task_id)
    except (NotFoundError, StorageError) as e:
        raise_http_error(e)


@router.put("/{task_id}")
async def update_task(task_id: TaskId, payload: TaskUpdate, current_user: CurrentUser, tasks: Tasks) -> MessageResponse:
    """Replace all editable fields of one of the caller's tasks."""
    try:
        await tasks.update(current_user.id, task_id, payload)
    except (InvalidInputError, NotFoundError, StorageError) as e:
        raise_http_error(e)

    return MessageResponse(message="Tarefa atualizada com sucesso")


@router.patch("/{task_id}/toggle")
async def toggle_task(task_id: TaskId, current_user: CurrentUser, tasks: Tasks) -> Task:
    """Flip a task between pendente and concluída."""
    try:
        return await tasks.toggle_status(current_user.id, task_id)
    except (NotFoundError, StorageError) as e:
        raise_http_error(e)


@router.delete("/{task_id}")
async def delete_task(task_id: TaskId, current_user: CurrentUser, tasks: Tasks) -> MessageResponse:
    """Delete one of the caller's tasks."""
    try:
        await tasks.delete(current_user.id, task_id)
    except (NotFoundError, StorageError) as e:
        raise_http_error(e)

    return MessageResponse(message="Tarefa excluída com sucesso")
