from __future__ import annotations

import logging
import threading

from .scheduler import TaskScheduler

logger = logging.getLogger(__name__)


class PeriodicSweeper:
    """Calls ``scheduler.sweep()`` on a fixed interval from a daemon thread."""

    def __init__(self, scheduler: TaskScheduler, interval_seconds: float = 30.0) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._scheduler = scheduler
        self._interval = float(interval_seconds)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="smartqueue-sweeper", daemon=True)
        self._thread.start()
        logger.info("Sweeper started interval=%ss", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Sweeper stopped")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._scheduler.sweep()
            except Exception:  # noqa: BLE001
                logger.exception("Periodic sweep failed")
