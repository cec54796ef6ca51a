"""Utility helpers for logging and payload formatting."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import colorlog


def _log_timezone() -> timezone:
    try:
        offset = float(os.getenv("LOG_UTC_OFFSET_HOURS", "0"))
    except ValueError:
        offset = 0.0
    return timezone(timedelta(hours=offset))


LOG_TZ = _log_timezone()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _format_record_time(record: logging.LogRecord, datefmt: str | None) -> str:
    dt = datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone(LOG_TZ)
    s = dt.strftime(datefmt or LOG_DATEFMT)
    # 2025-10-24 10:10:24,047
    return f"{s},{int(record.msecs):03d}"


class OffsetTimeFormatter(logging.Formatter):
    """Formatter that renders timestamps in the configured UTC offset."""

    def formatTime(self, record, datefmt=None):
        return _format_record_time(record, datefmt)


class OffsetColoredFormatter(colorlog.ColoredFormatter):
    """Colored formatter with the configured UTC offset."""

    def formatTime(self, record, datefmt=None):
        return _format_record_time(record, datefmt)


class _MaxLevelFilter(logging.Filter):
    """Filter that only allows records up to a specific level."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - logging helper
        return record.levelno <= self._max_level


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """Configure a color logger that also writes to file."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    color_formatter = OffsetColoredFormatter(
        "%(log_color)s" + LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )
    console_handler = colorlog.StreamHandler(stream=sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.addFilter(_MaxLevelFilter(logging.INFO))
    console_handler.setFormatter(color_formatter)
    logger.addHandler(console_handler)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(OffsetTimeFormatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(stderr_handler)

    Path("./logs").mkdir(exist_ok=True)
    file_handler = logging.FileHandler("./logs/app.log", encoding="utf-8")
    file_handler.setFormatter(OffsetTimeFormatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(file_handler)

    return logger


def truncate_for_log(value: Any, limit: int = 100) -> str:
    """Serialize ``value`` as JSON and clip it for single-line log output."""
    try:
        text = json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(value)
    return text[:limit]
