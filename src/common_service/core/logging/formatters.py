# src/common_service/core/logging/formatters.py
"""
Custom logging formatters for the application.

  - JsonFormatter: one JSON object per record, shaped as

        {"timestamp": ..., "level": ..., "message": ..., <structured fields>...}

    Structured fields come from `record.fields` (set by AppLogger). Records from
    plain stdlib loggers (uvicorn, libraries) have no `fields`; for those the
    logger name and any `extra={...}` attributes are emitted instead.
    Caller location (pathname / lineno / funcName) is intentionally left out.

  - ColorFormatter: ANSI-colored single-line output for local development,
    with the structured fields appended as key=value pairs.

Timestamps are ISO-8601 in UTC with millisecond precision, e.g.
"2025-01-31T09:15:02.123Z". Level names are upper-case, with WARNING shown as
"WARN".

Both formatters are selected by builder.make_dict_config() from settings.LOG_FORMAT.
"""

import json
import logging
import time
from typing import Any
from logging import LogRecord

# LogRecord attributes that are never treated as extras.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "fields"}

_LEVEL_NAMES = {"WARNING": "WARN"}


def level_name(record: LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelname, record.levelname)


def record_fields(record: LogRecord) -> dict[str, Any]:
    """
    Structured fields for a record: `record.fields` when present, otherwise
    the logger name plus any non-reserved attributes passed through `extra`.
    """
    fields = getattr(record, "fields", None)
    if isinstance(fields, dict):
        return fields
    extras: dict[str, Any] = {"logger": record.name}
    for k, v in record.__dict__.items():
        if k not in _RESERVED and not k.startswith("_"):
            extras[k] = v
    return extras


class _UTCISOFormatter(logging.Formatter):
    converter = time.gmtime
    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"


class JsonFormatter(_UTCISOFormatter):
    """
    Structured JSON formatter.

    Non-serializable field values are converted with `str()`; this method
    never raises on odd values.
    """

    def __init__(self, *, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": level_name(record),
            "message": record.getMessage(),
        }

        for k, v in record_fields(record).items():
            if k in ("timestamp", "level", "message"):
                continue
            log_record[k] = v

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(_UTCISOFormatter):
    """
    Development-friendly colored formatter.

    TIMESTAMP | LEVEL | LOGGER | MESSAGE [key=value, ...]
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{level_name(record):<8}{reset} | "
            f"{record.name:<24} | "
            f"{record.getMessage()}"
        )

        fields = getattr(record, "fields", None)
        if isinstance(fields, dict) and fields:
            pairs = [f"{key}={value}" for key, value in fields.items()]
            base += f" [{', '.join(pairs)}]"

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
