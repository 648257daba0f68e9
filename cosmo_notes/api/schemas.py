from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cosmo_notes.domain.dates import to_iso
from cosmo_notes.domain.entities import ShareResult, TaskEntity


class CreateTaskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    tags: Optional[list[str]] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class UpdateTaskRequest(BaseModel):
    """Partial update; only fields present in the body are applied.

    Sharing state is not writable here, use the share endpoints instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    tags: Optional[list[str]] = None


def task_to_dict(task: TaskEntity) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "isPublic": task.is_public,
        "isOverdue": task.is_overdue,
        "createdAt": to_iso(task.created_at),
        "updatedAt": to_iso(task.updated_at),
    }
    if task.content is not None:
        payload["content"] = task.content
    if task.due_date is not None:
        payload["dueDate"] = to_iso(task.due_date)
    if task.tags is not None:
        payload["tags"] = list(task.tags)
    if task.share_id is not None:
        payload["shareId"] = task.share_id
    if task.user_id is not None:
        payload["userId"] = task.user_id
    return payload


def share_to_dict(result: ShareResult) -> dict[str, Any]:
    return {
        "shareId": result.share_id,
        "shareUrl": result.share_url,
        "isPublic": result.is_public,
    }
