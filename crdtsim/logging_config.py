"""Logging configuration utilities for crdtsim.

Networks narrate what they do (disconnects, broadcasts, syncs) through
the ``crdtsim`` logger hierarchy. Every narration line is prefixed with
the network's name, e.g. ``[StarNetwork] Server is down.``. The library is
silent by default (NullHandler); a driver turns narration on with one of
the helpers here.

Example usage:
    import crdtsim

    # Follow a scenario on the console, one narration line per event
    crdtsim.enable_console_logging()

    # Keep a rotating JSON log of a long run
    crdtsim.enable_file_logging("logs/crdtsim.jsonl", json=True)

    # Let the environment decide, fall back to console narration
    if not crdtsim.configure_from_env():
        crdtsim.enable_console_logging()

Environment variables:
    CRDTSIM_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CRDTSIM_LOG_FILE: Path to log file (enables rotating file logging)
    CRDTSIM_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json as jsonlib
import logging
import os
import re
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "enable_console_logging",
    "enable_file_logging",
]

# Console output reads like the scenario's own printout.
NARRATION_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "crdtsim"

ENV_LEVEL = "CRDTSIM_LOGGING"
ENV_FILE = "CRDTSIM_LOG_FILE"
ENV_JSON = "CRDTSIM_LOG_JSON"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_NETWORK_PREFIX = re.compile(r"^\[(?P<network>[^\]]+)\] (?P<message>.*)$", re.DOTALL)


class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line.

    The ``[network]`` prefix of narration lines is split out into its own
    field so runs with several networks can be filtered.

    Example output:
        {"timestamp": "2024-01-15T10:30:00.123456+00:00", "level": "INFO",
         "logger": "crdtsim.network.star", "network": "StarNetwork",
         "message": "Server is down."}
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        match = _NETWORK_PREFIX.match(message)
        if match:
            log_data["network"] = match.group("network")
            message = match.group("message")
        log_data["message"] = message

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return jsonlib.dumps(log_data)


def _get_level(level: str | int) -> int:
    """Convert a level string or int to a logging level constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    """Get the crdtsim root logger."""
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Remove and close all handlers from the crdtsim logger except NullHandler."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install(handler: logging.Handler, level: LogLevel | int) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    logger.addHandler(handler)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = NARRATION_FORMAT,
    json: bool = False,
) -> logging.StreamHandler:
    """Print network narration to stderr.

    INFO shows disconnects, reconnects, broadcasts and syncs. DEBUG adds
    one line per individual merge.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int.
        format: Log message format string. Ignored when ``json`` is set.
        json: Emit one JSON object per record instead of plain text.

    Returns:
        The created StreamHandler.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json else logging.Formatter(format))
    _install(handler, level)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    json: bool = False,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """Write network narration to a rotating log file.

    When the log file reaches ``max_bytes`` it is renamed with a numeric
    suffix and a new file is started. Up to ``backup_count`` old files are
    kept.

    Args:
        path: Path to the log file. Parent directories are created automatically.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int.
        json: Emit one JSON object per line instead of timestamped text.
        max_bytes: Maximum size of each log file in bytes. Default 10 MB.
        backup_count: Number of backup files to keep. Default 5.

    Returns:
        The created RotatingFileHandler.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    if json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(FILE_FORMAT, DEFAULT_DATE_FORMAT))
    _install(handler, level)
    return handler


def configure_from_env() -> bool:
    """Configure logging from environment variables.

    Reads ``CRDTSIM_LOGGING``, ``CRDTSIM_LOG_FILE`` and ``CRDTSIM_LOG_JSON``.
    Handlers installed by an earlier call are replaced. If neither a level
    nor a file is set, nothing changes.

    Returns:
        True if a handler was installed.

    Example:
        # In shell:
        export CRDTSIM_LOGGING=DEBUG
        export CRDTSIM_LOG_FILE=crdtsim.log
        python examples/gcounter_star.py
    """
    level = os.environ.get(ENV_LEVEL, "").upper()
    log_file = os.environ.get(ENV_FILE, "")
    use_json = os.environ.get(ENV_JSON, "") == "1"

    if not level and not log_file:
        return False

    _clear_handlers()
    level = level or "INFO"
    if log_file:
        enable_file_logging(log_file, level=level, json=use_json)
    else:
        enable_console_logging(level=level, json=use_json)
    return True
