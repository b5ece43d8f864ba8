"""
Logging configuration for vulkan-check.

Console output is colored on a terminal; the optional log file is plain
text or JSON lines. Records emitted while one adapter is being probed or
parsed carry its index.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import json
from pathlib import Path
from typing import Optional


def _adapter_prefix(record: logging.LogRecord) -> str:
    index = getattr(record, "adapter_index", None)
    return "" if index is None else f"[GPU{index}] "


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the adapter index when known."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "adapter_index": getattr(record, "adapter_index", None),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """Console formatter; colors the level name when writing to a terminal."""

    COLORS = {
        logging.DEBUG: "\033[36m",    # Cyan
        logging.INFO: "\033[32m",     # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",    # Red
        logging.CRITICAL: "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = False):
        super().__init__("%(levelname)s %(name)s: %(adapter)s%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        record.adapter = _adapter_prefix(record)
        levelname = record.levelname
        if self.color:
            record.levelname = f"{self.COLORS.get(record.levelno, '')}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    json_logs: bool = False,
):
    """
    Configure logging for the vulkan-check command.

    Args:
        level: Console logging level
        log_file: Optional file that receives every record at DEBUG level
        json_logs: Write the log file as JSON lines
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(color=sys.stderr.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        if json_logs:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s: %(message)s"
            ))
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(level)

    logging.getLogger("gi").setLevel(logging.WARNING)


class AdapterLogContext:
    """
    Tag every record emitted inside the block with an adapter index.

    Example:
        with AdapterLogContext(0):
            logger.info("Probing")  # record.adapter_index == 0
    """

    def __init__(self, index: int):
        self.index = index
        self._old_factory = None

    def __enter__(self):
        self._old_factory = logging.getLogRecordFactory()
        old_factory, index = self._old_factory, self.index

        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.adapter_index = index
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args):
        logging.setLogRecordFactory(self._old_factory)
