from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TaskFilters:
    tag: str | None = None
    overdue: Optional[bool] = None
    is_public: Optional[bool] = None
    owner_id: str | None = None
