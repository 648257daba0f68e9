from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OVERDUE_SWEEP_ENABLED", "false")

from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from cosmo_notes.api.app import create_app
from cosmo_notes.config import SETTINGS
from cosmo_notes.infra import models  # noqa: F401
from cosmo_notes.infra.db import Base, create_db_engine, make_session_factory
from cosmo_notes.infra.repository import TaskRepository


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 12, 0, 0))


@pytest.fixture()
def session_factory():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def repo(session_factory, clock: FakeClock) -> TaskRepository:
    return TaskRepository(session_factory, clock=clock)


@pytest.fixture()
def settings():
    return replace(SETTINGS, overdue_sweep_enabled=False, public_base_url=None)


@pytest.fixture()
def client(repo: TaskRepository, settings) -> TestClient:
    return TestClient(create_app(settings=settings, repo=repo))
