from __future__ import annotations

import logging
import threading

from .overdue_service import OverdueService

logger = logging.getLogger(__name__)


class OverdueScheduler:
    """Runs the overdue sweep on a background thread at a fixed interval.

    ``start`` and ``stop`` are both idempotent. Stopping waits for a sweep that
    is already running to finish; it never interrupts one.
    """

    def __init__(self, service: OverdueService, interval_minutes: float = 60.0) -> None:
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")
        self._service = service
        self._interval_seconds = interval_minutes * 60
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

    @property
    def interval_minutes(self) -> float:
        return self._interval_seconds / 60

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                if self._stop_event is not None and self._stop_event.is_set():
                    logger.warning("Overdue detection is still stopping; start skipped")
                else:
                    logger.info("Overdue detection is already running")
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                name="overdue-sweep",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()
        logger.info("Started scheduled overdue detection interval_minutes=%s", self.interval_minutes)

    def stop(self, timeout: float | None = None) -> None:
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            if thread is None or stop_event is None:
                return
            stop_event.set()
        thread.join(timeout)
        if thread.is_alive():
            # handle is held until the loop has exited
            logger.warning("Overdue sweep still finishing after stop timeout=%s", timeout)
            return
        with self._lock:
            if self._thread is thread:
                self._thread = None
                self._stop_event = None
        logger.info("Stopped scheduled overdue detection")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_seconds):
            try:
                self._service.update_overdue_status()
            except Exception:  # noqa: BLE001
                logger.exception("Scheduled overdue update failed")
