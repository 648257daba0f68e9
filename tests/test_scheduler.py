from __future__ import annotations

import threading
import time

import pytest

from cosmo_notes.domain.entities import SweepResult
from cosmo_notes.services.scheduler import OverdueScheduler

# 60 ms between sweeps
FAST_INTERVAL_MIN = 0.001


class CountingService:
    def __init__(self, fail_first: bool = False) -> None:
        self.calls = 0
        self.fail_first = fail_first
        self.called_twice = threading.Event()

    def update_overdue_status(self) -> SweepResult:
        self.calls += 1
        if self.calls >= 2:
            self.called_twice.set()
        if self.fail_first and self.calls == 1:
            raise RuntimeError("boom")
        return SweepResult(updated_count=0, overdue_tasks=[])


def test_scheduler_runs_sweeps_until_stopped() -> None:
    service = CountingService()
    scheduler = OverdueScheduler(service, interval_minutes=FAST_INTERVAL_MIN)

    scheduler.start()
    try:
        assert service.called_twice.wait(timeout=5)
        assert scheduler.running
    finally:
        scheduler.stop(timeout=5)

    assert not scheduler.running
    calls_after_stop = service.calls
    time.sleep(0.2)
    assert service.calls == calls_after_stop


def test_scheduler_keeps_running_after_failed_sweep() -> None:
    service = CountingService(fail_first=True)
    scheduler = OverdueScheduler(service, interval_minutes=FAST_INTERVAL_MIN)

    scheduler.start()
    try:
        assert service.called_twice.wait(timeout=5)
    finally:
        scheduler.stop(timeout=5)


def test_start_and_stop_are_idempotent() -> None:
    scheduler = OverdueScheduler(CountingService(), interval_minutes=60)

    scheduler.stop()
    scheduler.start()
    first_thread = scheduler._thread
    scheduler.start()
    assert scheduler._thread is first_thread

    scheduler.stop(timeout=5)
    scheduler.stop()
    assert not scheduler.running


def test_scheduler_can_restart() -> None:
    service = CountingService()
    scheduler = OverdueScheduler(service, interval_minutes=60)

    scheduler.start()
    scheduler.stop(timeout=5)
    scheduler.start()
    try:
        assert scheduler.running
    finally:
        scheduler.stop(timeout=5)


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        OverdueScheduler(CountingService(), interval_minutes=0)


class BlockingService:
    def __init__(self) -> None:
        self.calls = 0
        self.entered = threading.Event()
        self.release = threading.Event()

    def update_overdue_status(self) -> SweepResult:
        self.calls += 1
        self.entered.set()
        self.release.wait(timeout=5)
        return SweepResult(updated_count=0, overdue_tasks=[])


def test_stop_timeout_keeps_single_sweep_loop() -> None:
    service = BlockingService()
    scheduler = OverdueScheduler(service, interval_minutes=FAST_INTERVAL_MIN)

    scheduler.start()
    try:
        assert service.entered.wait(timeout=5)
        first_thread = scheduler._thread

        scheduler.stop(timeout=0.05)
        assert scheduler.running
        assert scheduler._thread is first_thread

        scheduler.start()
        assert scheduler._thread is first_thread
    finally:
        service.release.set()
        scheduler.stop(timeout=5)

    assert not scheduler.running
    assert scheduler._thread is None
    assert service.calls == 1
