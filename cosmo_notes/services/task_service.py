from __future__ import annotations

import logging

from cosmo_notes.domain.entities import ShareResult, TaskEntity
from cosmo_notes.domain.errors import (
    SharedTaskNotFoundError,
    TaskNotFoundError,
    ValidationFailedError,
)
from cosmo_notes.domain.filters import TaskFilters
from cosmo_notes.infra.repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        logger.info("route=tasks method=GET action=list filters=%s", filters)
        return self._repo.list_tasks(filters)

    def get_task(self, task_id: str) -> TaskEntity | None:
        logger.info("route=tasks method=GET action=getById id=%s", task_id)
        return self._repo.get_task(task_id)

    def create_task(self, data: dict, owner_id: str | None = None) -> TaskEntity:
        normalized = self._normalize_data(data)
        if not normalized.get("title"):
            raise ValidationFailedError("Title is required")
        logger.info("route=tasks method=POST action=create title=%r", normalized["title"])
        task = self._repo.create_task(normalized, owner_id)
        logger.info("route=tasks method=POST action=create status=201 id=%s", task.id)
        return task

    def update_task(self, task_id: str, data: dict) -> TaskEntity | None:
        normalized = self._normalize_data(data)
        if "title" in normalized and not normalized["title"]:
            raise ValidationFailedError("Title cannot be blank")
        logger.info(
            "route=tasks method=PUT action=update id=%s fields=%s",
            task_id,
            sorted(normalized),
        )
        return self._repo.update_task(task_id, normalized)

    def delete_task(self, task_id: str) -> bool:
        logger.info("route=tasks method=DELETE action=delete id=%s", task_id)
        return self._repo.delete_task(task_id)

    def share_task(self, task_id: str, base_url: str) -> ShareResult:
        if self._repo.get_task(task_id) is None:
            raise TaskNotFoundError(task_id)
        share_id = self._repo.make_public(task_id)
        if share_id is None:
            # deleted between the lookup and the write
            raise TaskNotFoundError(task_id)
        share_url = f"{base_url.rstrip('/')}/shared/{share_id}"
        logger.info("route=sharing method=POST action=share id=%s share_id=%s", task_id, share_id)
        return ShareResult(share_id=share_id, share_url=share_url)

    def unshare_task(self, task_id: str) -> None:
        if not self._repo.make_private(task_id):
            raise TaskNotFoundError(task_id)
        logger.info("route=sharing method=DELETE action=unshare id=%s", task_id)

    def get_shared_task(self, share_id: str) -> TaskEntity:
        task = self._repo.get_task_by_share_id(share_id)
        if task is None:
            raise SharedTaskNotFoundError(share_id)
        logger.info("route=shared method=GET action=resolve share_id=%s id=%s", share_id, task.id)
        return task

    def _normalize_data(self, data: dict) -> dict:
        normalized = dict(data)
        if isinstance(normalized.get("title"), str):
            normalized["title"] = normalized["title"].strip()
        if normalized.get("tags") is not None:
            normalized["tags"] = [str(tag) for tag in normalized["tags"]]
        return normalized
