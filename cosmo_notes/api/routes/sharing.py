from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from cosmo_notes.api.dependencies import get_task_service, share_base_url
from cosmo_notes.api.responses import envelope
from cosmo_notes.api.schemas import share_to_dict, task_to_dict
from cosmo_notes.services.task_service import TaskService

router = APIRouter(tags=["sharing"])


@router.post("/tasks/{task_id}/share")
def share_task(
    task_id: str,
    request: Request,
    service: TaskService = Depends(get_task_service),
):
    result = service.share_task(task_id, share_base_url(request))
    return envelope(share_to_dict(result))


@router.delete("/tasks/{task_id}/share")
def unshare_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.unshare_task(task_id)
    return envelope({"isPublic": False}, message="Task is now private")


# No authentication: holding the share token is the only requirement.
@router.get("/shared/{share_id}")
def get_shared_task(share_id: str, service: TaskService = Depends(get_task_service)):
    task = service.get_shared_task(share_id)
    return envelope(task_to_dict(task))
