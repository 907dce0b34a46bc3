"""Structured JSON logging configuration."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

# Attributes every LogRecord carries; anything else on a record came from extra={...}
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line.

    Fields passed with logger.info("msg", extra={"userId": 1}) become
    top-level keys; values json cannot encode (datetimes) are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not callable(value)
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_structured_logging(level: str | None = None):
    """Route the root logger through JSONFormatter.

    The level defaults to the LOG_LEVEL environment variable, then INFO.
    Uvicorn access logs share the handler but only at WARNING and above.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.handlers = [handler]
    access_logger.setLevel(logging.WARNING)
