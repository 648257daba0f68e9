from __future__ import annotations

import logging

from cosmo_notes.domain.entities import SweepResult, TaskEntity
from cosmo_notes.infra.repository import TaskRepository

logger = logging.getLogger(__name__)


class OverdueService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def update_overdue_status(self) -> SweepResult:
        logger.info("Starting overdue status update")
        try:
            updated_count = self._repo.update_overdue_status()
            overdue_tasks = self._repo.list_overdue()
        except Exception:
            logger.exception("Failed to update overdue status")
            raise
        logger.info(
            "Overdue status update completed updated_count=%s overdue_count=%s",
            updated_count,
            len(overdue_tasks),
        )
        return SweepResult(updated_count=updated_count, overdue_tasks=overdue_tasks)

    def get_overdue_tasks(self, owner_id: str | None = None) -> list[TaskEntity]:
        tasks = self._repo.list_overdue(owner_id)
        logger.info("Retrieved overdue tasks count=%s user_id=%s", len(tasks), owner_id or "all")
        return tasks

    def send_overdue_notifications(self, owner_id: str | None = None) -> int:
        """Report the notifications that would go out for overdue tasks.

        Nothing is delivered; the return value is the number of overdue tasks
        that a real notifier would have been handed.
        """
        tasks = self.get_overdue_tasks(owner_id)
        for task in tasks:
            logger.info(
                "Would notify overdue task id=%s title=%r due_date=%s",
                task.id,
                task.title,
                task.due_date,
            )
        logger.info("Overdue notifications would be sent count=%s", len(tasks))
        return len(tasks)
