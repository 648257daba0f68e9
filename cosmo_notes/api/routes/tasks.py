from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cosmo_notes.api.dependencies import get_task_service
from cosmo_notes.api.responses import envelope
from cosmo_notes.api.schemas import CreateTaskRequest, UpdateTaskRequest, task_to_dict
from cosmo_notes.domain.errors import TaskNotFoundError
from cosmo_notes.domain.filters import TaskFilters
from cosmo_notes.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _parse_flag(raw: Optional[str]) -> Optional[bool]:
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


@router.get("")
def list_tasks(
    tag: Optional[str] = None,
    overdue: Optional[str] = None,
    public: Optional[str] = None,
    user_id: Optional[str] = Query(None, alias="userId"),
    service: TaskService = Depends(get_task_service),
):
    filters = TaskFilters(
        tag=tag or None,
        overdue=_parse_flag(overdue),
        is_public=_parse_flag(public),
        owner_id=user_id or None,
    )
    tasks = service.list_tasks(filters)
    return envelope([task_to_dict(task) for task in tasks], count=len(tasks))


@router.post("")
def create_task(
    payload: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    data = payload.model_dump(exclude_unset=True, exclude={"user_id"})
    task = service.create_task(data, owner_id=payload.user_id)
    return envelope(task_to_dict(task), status_code=201)


@router.get("/{task_id}")
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    task = service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return envelope(task_to_dict(task))


@router.put("/{task_id}")
def update_task(
    task_id: str,
    payload: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    task = service.update_task(task_id, payload.model_dump(exclude_unset=True))
    if task is None:
        raise TaskNotFoundError(task_id)
    return envelope(task_to_dict(task))


@router.delete("/{task_id}")
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    if not service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return envelope(message="Task deleted successfully")
