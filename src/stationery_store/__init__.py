"""Stationery store simulator.

Importing the package configures the shared ``stationery_store`` logger: a
rotating log file under ``.logs/`` in the working directory, and a stderr
handler that only shows warnings and errors so it stays out of the way of the
interactive menu. :func:`set_log_directory` moves the log file, for example to
the directory named by ``[Logging] LogDir`` in ``config.ini``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FILE_NAME = "stationery_store.log"
DEFAULT_LOG_DIR = Path(".logs")

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _build_file_handler(log_dir: Path) -> Optional[RotatingFileHandler]:
    """Return a rotating handler writing into ``log_dir``, or ``None`` if unusable."""

    log_file = Path(log_dir).expanduser().resolve() / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
    except (OSError, PermissionError) as exc:
        print(
            f"Warning: unable to initialize log file at '{log_file}': {exc}",
            file=sys.stderr,
        )
        return None
    handler.setLevel(logging.INFO)
    handler.setFormatter(_FORMATTER)
    return handler


def _configure_logging() -> logging.Logger:
    """Configure package-wide logging with file and console handlers."""

    logger = logging.getLogger(__name__)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    file_handler = _build_file_handler(DEFAULT_LOG_DIR)
    if file_handler is not None:
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(_FORMATTER)
    logger.addHandler(console_handler)

    return logger


def current_log_file() -> Optional[Path]:
    """Return the file the package logger currently writes to, if any."""

    for handler in log.handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)
    return None


def set_log_directory(log_dir: Path) -> Optional[Path]:
    """Send the package log file to ``log_dir`` instead of its current place.

    Returns:
        Path | None: The new log file, or ``None`` when ``log_dir`` cannot be
            written and the previous file handler was kept.
    """

    new_handler = _build_file_handler(log_dir)
    if new_handler is None:
        return None
    for handler in list(log.handlers):
        if isinstance(handler, RotatingFileHandler):
            log.removeHandler(handler)
            handler.close()
    log.addHandler(new_handler)
    log.info("Logging to '%s'", new_handler.baseFilename)
    return Path(new_handler.baseFilename)


log = _configure_logging()
log.info("Logger initialized for the 'stationery_store' package.")
