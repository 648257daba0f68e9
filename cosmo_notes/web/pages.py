"""Server-rendered pages for the browser UI."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from cosmo_notes.api.dependencies import get_task_service
from cosmo_notes.domain.errors import SharedTaskNotFoundError
from cosmo_notes.services.task_service import TaskService

templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", {"api_base": "/api/v1"})


@router.get("/shared/{share_id}", response_class=HTMLResponse)
def shared_note(
    share_id: str,
    request: Request,
    service: TaskService = Depends(get_task_service),
):
    try:
        task = service.get_shared_task(share_id)
    except SharedTaskNotFoundError:
        return templates.TemplateResponse(
            request,
            "shared.html",
            {"task": None, "share_id": share_id},
            status_code=404,
        )
    return templates.TemplateResponse(request, "shared.html", {"task": task, "share_id": share_id})
