"""Application-wide logger writing to the console and to a log file."""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

LOGGER_NAME = "northernlights"
LOG_FILE_NAME = "execution.log"

_CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
_FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_lock = threading.Lock()
_configured_dir: Path | None = None


class _LowercaseLevelFormatter(logging.Formatter):
    """Formatter that renders level names in lower case (``info``, ``warning``)."""

    def format(self, record: logging.LogRecord) -> str:
        shown = logging.makeLogRecord(record.__dict__)
        shown.levelname = record.levelname.lower()
        return super().format(shown)


def get_logger(log_dir: str | Path = "logs") -> logging.Logger:
    """Return the shared application logger, configuring it on first use.

    Records at INFO and above go to standard output and to
    ``<log_dir>/execution.log``; the file is truncated when the logger is set
    up. Calling again with the same directory returns the same logger without
    adding handlers; a different directory replaces the handlers.
    """
    global _configured_dir

    path = Path(log_dir).resolve()
    logger = logging.getLogger(LOGGER_NAME)

    with _lock:
        if _configured_dir == path and logger.handlers:
            return logger

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        path.mkdir(parents=True, exist_ok=True)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(_LowercaseLevelFormatter(_CONSOLE_FORMAT))

        log_file = logging.FileHandler(path / LOG_FILE_NAME, mode="w", encoding="utf-8")
        log_file.setFormatter(_LowercaseLevelFormatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))

        logger.addHandler(console)
        logger.addHandler(log_file)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        _configured_dir = path

    return logger