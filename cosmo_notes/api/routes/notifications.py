from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool

from cosmo_notes.api.dependencies import get_overdue_service
from cosmo_notes.api.responses import envelope
from cosmo_notes.api.schemas import task_to_dict
from cosmo_notes.services.overdue_service import OverdueService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/overdue")
def list_overdue(
    user_id: Optional[str] = Query(None, alias="userId"),
    service: OverdueService = Depends(get_overdue_service),
):
    tasks = service.get_overdue_tasks(user_id or None)
    message = f"Found {len(tasks)} overdue task(s)" if tasks else "No overdue tasks found"
    return envelope([task_to_dict(task) for task in tasks], count=len(tasks), message=message)


@router.post("/overdue/update")
def update_overdue(service: OverdueService = Depends(get_overdue_service)):
    result = service.update_overdue_status()
    overdue_count = len(result.overdue_tasks)
    return envelope(
        {"updatedCount": result.updated_count, "overdueTasksCount": overdue_count},
        message=f"Updated {result.updated_count} task(s), {overdue_count} task(s) are now overdue",
    )


@router.post("/overdue/send")
async def send_overdue(
    request: Request,
    service: OverdueService = Depends(get_overdue_service),
):
    try:
        body = await request.json()
    except ValueError:
        body = {}
    user_id = body.get("userId") if isinstance(body, dict) else None
    sent = await run_in_threadpool(service.send_overdue_notifications, user_id or None)
    return envelope(
        {"notificationsSent": sent},
        message=f"Would send {sent} notification(s) for overdue tasks",
    )
