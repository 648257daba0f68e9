from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    content: Optional[str]
    due_date: Optional[datetime]
    tags: Optional[list[str]]
    is_public: bool
    is_overdue: bool
    share_id: Optional[str]
    created_at: datetime
    updated_at: datetime
    user_id: Optional[str]


@dataclass(frozen=True)
class ShareResult:
    share_id: str
    share_url: str
    is_public: bool = True


@dataclass(frozen=True)
class SweepResult:
    updated_count: int
    overdue_tasks: list[TaskEntity]
