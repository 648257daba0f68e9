from __future__ import annotations

from fastapi import Request

from cosmo_notes.config import Settings
from cosmo_notes.services.overdue_service import OverdueService
from cosmo_notes.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_overdue_service(request: Request) -> OverdueService:
    return request.app.state.overdue_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def share_base_url(request: Request) -> str:
    settings = get_settings(request)
    if settings.public_base_url:
        return settings.public_base_url
    return str(request.base_url).rstrip("/")
