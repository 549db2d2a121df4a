from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import PROJECT_ROOT, SETTINGS

LOG_FILE_NAME = "focusboard.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class _ConsoleFilter(logging.Filter):
    """Show every FocusBoard record on the console, but only errors from libraries."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "app" or record.name.startswith("app."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(level: str | None = None, log_dir: str | Path | None = None) -> Path:
    """Route all records to a rotating log file and the console.

    Safe to call more than once: handlers from a previous call are replaced.
    Returns the path of the log file.
    """
    directory = Path(log_dir) if log_dir is not None else PROJECT_ROOT / SETTINGS.log_dir
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel((level or SETTINGS.log_level).upper())

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_ConsoleFilter())
    root.addHandler(console_handler)

    # SQL echo goes nowhere below WARNING, file included.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.captureWarnings(True)
    return log_file
