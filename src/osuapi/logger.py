"""Logging for the osuapi package.

Every module logs through a child of the ``osuapi`` logger. Only that
package logger owns a handler, so levels and formats are changed in one
place and applications can still silence the whole client at once.

Environment Variables:
    OSUAPI_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                      Default: INFO
    OSUAPI_LOG_FORMAT: Output format ("standard" or "json").
                       Default: standard
"""

import asyncio
import json
import logging
import os
import sys
from typing import Any

PACKAGE_LOGGER = "osuapi"

LOG_FORMAT_STANDARD = (
    "%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(message)s"
)

LOG_FORMAT_DEBUG = (
    "%(asctime)s.%(msecs)03d - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(name)s:%(funcName)s [%(task)s] - %(message)s"
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("OSUAPI_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def _current_task_name() -> str:
    try:
        task = asyncio.current_task()
    except RuntimeError:
        return "-"
    return task.get_name() if task is not None else "-"


class TaskNameFilter(logging.Filter):
    """Attach the running asyncio task name as ``record.task``.

    Lets renewal-loop lines ("osuapi-token-refresh") be told apart from
    request lines in interleaved output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.task = _current_task_name()
        return True


class JSONFormatter(logging.Formatter):
    """Format records as newline-delimited JSON.

    Each line carries timestamp, level, logger, message, source location
    and the asyncio task, plus the stack trace when one is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            "task": getattr(record, "task", "-"),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


def _formatter_for(level: int, format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter(datefmt=DATE_FORMAT)
    if level == logging.DEBUG:
        return logging.Formatter(LOG_FORMAT_DEBUG, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT_STANDARD, datefmt=DATE_FORMAT)


def configure_logging(
    level: int | str | None = None,
    format_type: str | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Install the package handler on the ``osuapi`` logger.

    Calling it again replaces the previous handler, so an application can
    switch to JSON output or its own handler after import.

    Args:
        level: Override the level read from OSUAPI_LOG_LEVEL.
        format_type: Either "standard" or "json"; read from
            OSUAPI_LOG_FORMAT when omitted.
        handler: Custom handler; defaults to a StreamHandler on stderr.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = _level_from(level)

    if format_type is None:
        format_type = os.getenv("OSUAPI_LOG_FORMAT", "standard").lower()
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)

    handler.setLevel(resolved)
    handler.addFilter(TaskNameFilter())
    handler.setFormatter(_formatter_for(resolved, format_type))

    package_logger.addHandler(handler)
    package_logger.setLevel(resolved)
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger below the configured ``osuapi`` package logger.

    Args:
        name: Typically __name__ of the calling module.

    Returns:
        Logger propagating to the package handler.
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Change the level of every osuapi logger at runtime.

    Args:
        level: New log level as int constant or string name.
    """
    resolved = _level_from(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved)

    for handler in package_logger.handlers:
        handler.setLevel(resolved)
        if not isinstance(handler.formatter, JSONFormatter):
            handler.setFormatter(_formatter_for(resolved, "standard"))


def mask_sensitive(value: str, prefix_len: int = 4, suffix_len: int = 4) -> str:
    """Mask a secret or token for logging.

    An authorization value keeps its scheme, e.g. "Bearer abcd***wxyz".

    Args:
        value: Secret, access token or full authorization value.
        prefix_len: Characters preserved at start.
        suffix_len: Characters preserved at end.

    Returns:
        Masked string with the middle replaced by asterisks.
    """
    scheme, sep, credential = value.partition(" ")
    if sep and credential:
        return f"{scheme} {mask_sensitive(credential, prefix_len, suffix_len)}"
    if len(value) <= prefix_len + suffix_len:
        return "***"
    return f"{value[:prefix_len]}***{value[-suffix_len:]}"
