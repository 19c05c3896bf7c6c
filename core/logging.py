"""
Logging setup

One call per process (web service or report CLI). The level comes from the
`log_level` setting and applies to both the console and the log file
(`logs/<process>/<process>.log`, rolled over at midnight).

Usage:
    settings = get_settings()
    setup_logging("cli", settings.log_level)
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Defaults, Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# Library loggers kept at WARNING whatever the configured level
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")

# Marks handlers installed here so a second setup replaces only those
_HANDLER_TAG = "_ledger_handler"


def parse_level(level: str | int) -> int:
    """Level name ("info", "DEBUG", ...) or number -> logging level

    Raises:
        ValueError: unknown level name
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    process_name: str,
    level: str | int = Defaults.LOG_LEVEL,
    log_dir: Path | None = None,
) -> Path:
    """Configure the root logger for a process

    Args:
        process_name: "web" or "cli" (names the log directory and file)
        level: configured log level
        log_dir: directory for the log file (None = logs/<process_name>)

    Returns:
        Path of the log file
    """
    numeric_level = parse_level(level)
    log_dir = log_dir or Paths.LOGS_DIR / process_name
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(numeric_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"

    for handler in (console, file_handler):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    root.info(
        f"Logging ready: {process_name} at {logging.getLevelName(numeric_level)} -> {log_file}"
    )
    return log_file
