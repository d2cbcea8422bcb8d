"""
Logging Utility for the Task Scheduler.

Every record is written to stdout as one JSON document carrying the
timestamp, level, logger name, message and any keyword fields passed to
StructuredLogger.
"""

import logging
import sys
from datetime import datetime
import json


class JsonFormatter(logging.Formatter):
    """Render a record and its structured fields as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "service": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "fields", {}))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Logger taking structured keyword fields, e.g. ``logger.info("Task created", task_id=3)``."""

    def __init__(self, name: str, level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Prevent adding handlers multiple times
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(JsonFormatter())
            self.logger.addHandler(handler)

    def info(self, message: str, **fields):
        self.logger.info(message, extra={"fields": fields})

    def warning(self, message: str, **fields):
        self.logger.warning(message, extra={"fields": fields})


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger, usually for the calling module's ``__name__``."""
    return StructuredLogger(name)
