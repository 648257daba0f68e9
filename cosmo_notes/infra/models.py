from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, String, Text

from cosmo_notes.domain.dates import utcnow

from .db import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=True)
    # JSON-encoded list of strings
    tags = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    is_overdue = Column(Boolean, nullable=False, default=False, index=True)
    share_id = Column(String(32), nullable=True, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    user_id = Column(String(255), nullable=True, index=True)
