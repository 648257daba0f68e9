from __future__ import annotations

import json
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy import select, update

from cosmo_notes.domain.dates import is_past, to_naive_utc, utcnow
from cosmo_notes.domain.entities import TaskEntity
from cosmo_notes.domain.filters import TaskFilters
from cosmo_notes.domain.tokens import new_share_id, new_task_id

from .db import SessionLocal
from .models import TaskModel

UPDATABLE_FIELDS = ("title", "content", "due_date", "tags")


def _dump_tags(tags: Optional[list[str]]) -> str | None:
    if tags is None:
        return None
    return json.dumps(list(tags))


def _load_tags(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    return json.loads(raw)


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        content=model.content,
        due_date=model.due_date,
        tags=_load_tags(model.tags),
        is_public=bool(model.is_public),
        is_overdue=bool(model.is_overdue),
        share_id=model.share_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
        user_id=model.user_id,
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filters(stmt, filters: TaskFilters) -> object:
    if filters.owner_id:
        stmt = stmt.where(TaskModel.user_id == filters.owner_id)

    if filters.tag:
        # tags are stored as a JSON array, so match the quoted element
        pattern = f"%{_escape_like(json.dumps(filters.tag))}%"
        stmt = stmt.where(TaskModel.tags.like(pattern, escape="\\"))

    if filters.overdue is not None:
        stmt = stmt.where(TaskModel.is_overdue.is_(filters.overdue))

    if filters.is_public is not None:
        stmt = stmt.where(TaskModel.is_public.is_(filters.is_public))

    return stmt


class TaskRepository:
    def __init__(
        self,
        session_factory=SessionLocal,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_task_id,
        share_id_factory: Callable[[], str] = new_share_id,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock
        self._id_factory = id_factory
        self._share_id_factory = share_id_factory

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel)
            stmt = _apply_filters(stmt, filters)
            stmt = stmt.order_by(TaskModel.created_at.desc())
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: str) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def create_task(self, data: dict, owner_id: str | None = None) -> TaskEntity:
        now = self._clock()
        due_date = to_naive_utc(data.get("due_date"))
        with self._session_factory() as session:
            task = TaskModel(
                id=self._id_factory(),
                title=data["title"],
                content=data.get("content") or None,
                due_date=due_date,
                tags=_dump_tags(data.get("tags")),
                is_public=False,
                is_overdue=is_past(due_date, now),
                share_id=None,
                created_at=now,
                updated_at=now,
                user_id=owner_id,
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: str, data: dict) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return None

            changes = {key: value for key, value in data.items() if key in UPDATABLE_FIELDS}
            if not changes:
                return _to_entity(task)

            now = self._clock()
            if "title" in changes:
                task.title = changes["title"]
            if "content" in changes:
                task.content = changes["content"] or None
            if "due_date" in changes:
                task.due_date = to_naive_utc(changes["due_date"])
                task.is_overdue = is_past(task.due_date, now)
            if "tags" in changes:
                task.tags = _dump_tags(changes["tags"])
            task.updated_at = now

            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def delete_task(self, task_id: str) -> bool:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return False
            session.delete(task)
            session.commit()
            return True

    def get_task_by_share_id(self, share_id: str) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel).where(
                TaskModel.share_id == share_id,
                TaskModel.is_public.is_(True),
            )
            task = session.scalars(stmt).first()
            return _to_entity(task) if task else None

    def make_public(self, task_id: str) -> Optional[str]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return None
            share_id = self._share_id_factory()
            task.is_public = True
            task.share_id = share_id
            task.updated_at = self._clock()
            session.commit()
            return share_id

    def make_private(self, task_id: str) -> bool:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return False
            task.is_public = False
            task.share_id = None
            task.updated_at = self._clock()
            session.commit()
            return True

    def update_overdue_status(self) -> int:
        """Recompute ``is_overdue`` for every task with a due date.

        Returns the number of rows written, which is every row with a due date
        rather than only those whose flag flipped.
        """
        now = self._clock()
        with self._session_factory() as session:
            result = session.execute(
                update(TaskModel)
                .where(TaskModel.due_date.is_not(None))
                .values(is_overdue=TaskModel.due_date < now, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            session.commit()
            return result.rowcount or 0

    def list_overdue(self, owner_id: str | None = None) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel).where(TaskModel.is_overdue.is_(True))
            if owner_id:
                stmt = stmt.where(TaskModel.user_id == owner_id)
            stmt = stmt.order_by(TaskModel.due_date.asc())
            return [_to_entity(task) for task in session.scalars(stmt)]
