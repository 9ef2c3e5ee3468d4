"""Logging for tree_sync.

Every module logs through ``logging.getLogger(__name__)``, so the whole
library hangs off the ``tree_sync`` logger. This module:
- attaches text or JSON-lines handlers to that logger (``configure_logging``)
- emits the per-sync summary with its counters as structured fields

Example:
    >>> configure_logging("DEBUG", json_output=True, log_file="sync.log")
    >>> sync_dir(LocalFS("build"), "", LocalFS("public"), "")
    # {"timestamp": "...", "level": "INFO", "logger": "tree_sync.sync.engine",
    #  "message": "Sync . -> .: 3 created, ...", "creates": 3, ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union


PACKAGE_LOGGER = "tree_sync"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Structured fields attached to the sync summary record
SYNC_FIELDS = (
    "source_root",
    "target_root",
    "creates",
    "updates",
    "deletes",
    "bytes_written",
    "duration_ms",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any sync fields the record carries."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in SYNC_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> logging.Logger:
    """Route tree_sync's log records to stderr and/or a file.

    Replaces any handlers a previous call installed, so calling it again
    reconfigures rather than duplicates output.

    Args:
        level: Logging level (DEBUG shows every planned and applied operation)
        json_output: If True, write JSON lines; otherwise plain text
        log_file: Optional path to log file (parent directories are created)
        console: If True, also log to stderr

    Returns:
        The ``tree_sync`` package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = _coerce_level(level)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_sync_summary(
    logger: logging.Logger,
    source_root: str,
    target_root: str,
    stats: Mapping[str, Any],
) -> None:
    """Log the INFO line closing a sync, with its counters as extra fields."""
    source_root = source_root or "."
    target_root = target_root or "."
    extra = {key: stats[key] for key in SYNC_FIELDS if key in stats}
    extra.update(source_root=source_root, target_root=target_root)

    logger.info(
        f"Sync {source_root} -> {target_root}: "
        f"{stats['creates']} created, "
        f"{stats['updates']} updated, "
        f"{stats['deletes']} deleted, "
        f"{stats['bytes_written']} bytes "
        f"in {stats['duration_ms']:.1f}ms",
        extra=extra,
    )
