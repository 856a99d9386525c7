"""
Logging setup for the holiday API.

`setup_logging()` is called once when the app is built; modules log through
`get_logger(__name__)` and pass request context with `extra={...}`.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

PACKAGE_PREFIX = 'holiday_api.'

# Attributes every LogRecord carries; anything else came in via `extra`
RECORD_ATTRIBUTES = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message',
})


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the attributes attached to a record through `extra=`."""
    return {k: v for k, v in record.__dict__.items() if k not in RECORD_ATTRIBUTES}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            'timestamp': created.isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key, value in extra_fields(record).items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        # Unserializable extras (exceptions, objects) fall back to str()
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line output for local runs, coloured when stderr is a TTY."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        level = record.levelname.ljust(5)
        if self.use_colors:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]

        line = f"{timestamp} {level} [{name}] {record.getMessage()}"
        extras = extra_fields(record)
        if extras:
            line += " (" + ", ".join(f"{k}={v}" for k, v in extras.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    json_format: Optional[bool] = None,
    level: Optional[str] = None,
    logger_name: Optional[str] = None
) -> None:
    """
    Attach a single stderr handler to the root logger (or `logger_name`).

    Unset arguments fall back to the LOG_FORMAT ("human" | "json") and
    LOG_LEVEL environment variables.
    """
    if json_format is None:
        json_format = os.getenv('LOG_FORMAT', 'human').lower() == 'json'
    numeric_level = getattr(logging, (level or os.getenv('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonFormatter() if json_format else HumanFormatter())

    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    if logger_name:
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
