from __future__ import annotations


class CosmoNotesError(Exception):
    """Base class for errors raised by the task layer."""


class ValidationFailedError(CosmoNotesError):
    pass


class TaskNotFoundError(CosmoNotesError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with ID {task_id} does not exist")
        self.task_id = task_id


class SharedTaskNotFoundError(CosmoNotesError):
    def __init__(self, share_id: str) -> None:
        super().__init__(f"No public task found with share ID {share_id}")
        self.share_id = share_id
