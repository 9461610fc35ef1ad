from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from smartqueue.config import SETTINGS, PROJECT_ROOT

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "alembic")


def setup_logging(level: str | None = None, log_dir: Path | None = None) -> Path:
    """Attach file and console handlers to the root logger; returns the log file path."""
    target_dir = log_dir or PROJECT_ROOT / SETTINGS.log_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / "smartqueue.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=(level or SETTINGS.log_level).upper(),
        handlers=[file_handler, console_handler],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
