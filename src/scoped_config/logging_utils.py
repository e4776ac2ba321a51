"""Structured logging for store events.

Store events are logged as short event names (``config_read``,
``key_overridden`` ...) with their details in ``extra``; the JSON formatter
flattens those details into the emitted object.
"""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any

from .config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

TEXT_FORMAT = "%(levelname)s %(name)s %(message)s"


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra`` fields attached to a record."""

    return {key: value for key, value in vars(record).items() if key not in _RECORD_FIELDS}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, event details included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = event_fields(record)
        payload.update(level=record.levelname, name=record.name, message=record.getMessage())
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _handler(config: LoggingConfig) -> logging.Handler:
    if not config.log_file:
        # stderr, so command output on stdout stays parseable.
        return logging.StreamHandler()
    return RotatingFileHandler(config.log_file, maxBytes=config.max_bytes, backupCount=config.backup_count)


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``."""

    handler = _handler(config)
    handler.setFormatter(JsonFormatter() if config.json_format else logging.Formatter(TEXT_FORMAT))
    level = getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, handlers=[handler], force=True)
