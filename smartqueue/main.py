from __future__ import annotations

import logging
import sys
import threading

from smartqueue.config import SETTINGS
from smartqueue.infra.db import init_db
from smartqueue.infra.logging import setup_logging
from smartqueue.infra.repository import TaskRepository
from smartqueue.services.notifications import (
    CompositeSink,
    LoggingNotificationSink,
    NotificationCenter,
)
from smartqueue.services.scheduler import TaskScheduler
from smartqueue.services.sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


def build_scheduler() -> tuple[TaskScheduler, NotificationCenter]:
    center = NotificationCenter(max_items=SETTINGS.notification_history)
    scheduler = TaskScheduler(
        TaskRepository(),
        CompositeSink(center, LoggingNotificationSink()),
    )
    scheduler.restore()
    return scheduler, center


def main() -> None:
    setup_logging()
    try:
        init_db()
    except Exception as exc:  # noqa: BLE001
        logger.critical("DB error: %s", exc)
        sys.exit(1)

    scheduler, _ = build_scheduler()
    stats = scheduler.get_stats()
    logger.info(
        "Scheduler ready total=%s pending=%s active=%s",
        stats["total"],
        stats["pending"],
        stats["active"],
    )

    sweeper = PeriodicSweeper(scheduler, SETTINGS.sweep_interval_seconds)
    sweeper.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        sweeper.stop(timeout=5)


if __name__ == "__main__":
    main()
