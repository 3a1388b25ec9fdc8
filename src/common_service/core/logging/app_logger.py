# src/common_service/core/logging/app_logger.py
"""
Contextual application logger.

`AppLogger` is a small façade over a stdlib `logging.Logger`. Every record it
writes carries a flat set of structured fields (stored on the LogRecord as
`record.fields`, rendered by JsonFormatter / ColorFormatter):

  - logID:        time.time_ns() at write time, a best-effort unique id
  - sid, custID:  read from the attached request context when present and non-empty
  - every field attached with `with_field()` (last write for a key wins)
  - the per-call fields (refID / serviceName / result for leveled writes,
    url / input / output / latency / status for the request/response pair)

Each instance has its own verbosity threshold, fixed at construction. The
threshold is applied here rather than through the shared stdlib logger's level,
so two AppLoggers on the same logger name can run at different levels.

Usage:

    log = new_app_logger("DEBUG").with_field(FieldKey.APP_NAME, "billing")
    log.info("charged", ref_id=42, service_name="payments", result={"ok": True})

    # access logging for one request (see middleware.AccessLogMiddleware)
    req_log = log.clone().with_context(ctx)
    await req_log.log_request()
    ...  # run the handler against ctx.receive / ctx.writer
    req_log.log_response()

An instance holds per-request capture state and is meant to be used by one
request at a time; build or clone one per request.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from common_service.utils.json import to_json_value
from common_service.utils.time import elapsed_ms, monotonic, now_ns

from .body_writer import BodyLogWriter
from .context import CUSTOMER_ID_KEY, SESSION_ID_KEY, RequestContext
from .handlers import get_fallback_handler

DEFAULT_LOGGER_NAME = "common_service.app"
DEFAULT_LEVEL = logging.INFO

LOG_ID_KEY = "logID"

# Accepted verbosity names. DPANIC/PANIC/FATAL are kept for configs written
# against other structured loggers and all map to CRITICAL.
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "DPANIC": logging.CRITICAL,
    "PANIC": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
}


class FieldKey(str, Enum):
    REF_ID = "refID"
    APP_NAME = "appName"
    SERVICE_NAME = "serviceName"


def parse_level(name: Any) -> int:
    """
    Map a verbosity name to a logging level. Unknown values fall back to INFO.
    """
    if not isinstance(name, str):
        return DEFAULT_LEVEL
    return _LEVELS.get(name.strip().upper(), DEFAULT_LEVEL)


class AppLogger:
    def __init__(self, level: str = "INFO", name: str = DEFAULT_LOGGER_NAME) -> None:
        self._level = parse_level(level)
        self._logger = logging.getLogger(name)
        self._ctx: RequestContext | None = None
        self._fields: dict[str, str] = {}

        # request / response capture state
        self._started: float | None = None
        self._request_body = ""
        self._response_writer: BodyLogWriter | None = None

    def __repr__(self) -> str:
        return f"<AppLogger name={self.name!r} level={self.level_name} fields={self._fields!r}>"

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def level(self) -> int:
        return self._level

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self._level)

    @property
    def fields(self) -> dict[str, str]:
        return dict(self._fields)

    @property
    def context(self) -> RequestContext | None:
        return self._ctx

    def is_enabled_for(self, level: int) -> bool:
        return level >= self._level

    # ------------------------
    # Builder-style mutators (return self)
    # ------------------------
    def with_context(self, ctx: RequestContext | None) -> AppLogger:
        if ctx is not self._ctx:
            # capture state belongs to the previous request
            self._started = None
            self._request_body = ""
            self._response_writer = None
        self._ctx = ctx
        return self

    def with_field(self, key: FieldKey | str, value: str) -> AppLogger:
        k = key.value if isinstance(key, FieldKey) else str(key)
        self._fields[k] = value
        return self

    def clone(self) -> AppLogger:
        """
        New logger with this logger's level and logger name only.

        Fields, request context and capture state are NOT carried over.
        """
        return AppLogger(self.level_name, self.name)

    # ------------------------
    # Record building
    # ------------------------
    def _generate_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {LOG_ID_KEY: now_ns()}

        if self._ctx is not None:
            sid = self._ctx.get_string(SESSION_ID_KEY)
            if sid != "":
                fields[SESSION_ID_KEY] = sid
            cust_id = self._ctx.get_string(CUSTOMER_ID_KEY)
            if cust_id != "":
                fields[CUSTOMER_ID_KEY] = cust_id

        fields.update(self._fields)
        return fields

    def _emit(self, level: int, message: str, extra_fields: dict[str, Any]) -> None:
        if level < self._level:
            return
        fields = self._generate_fields()
        fields.update(extra_fields)
        if not self._logger.hasHandlers():
            # Nothing configured yet: without a sink only lastResort (WARNING+, bare message) would see it.
            self._logger.addHandler(get_fallback_handler())
        record = self._logger.makeRecord(
            self._logger.name, level, "(app_logger)", 0, message, (), None,
            extra={"fields": fields},
        )
        # handle() skips the stdlib logger's own level check; our threshold already applied.
        self._logger.handle(record)

    def _write(self, level: int, message: str, ref_id: Any, service_name: Any, result: Any) -> None:
        self._emit(level, message, {
            "refID": to_json_value(ref_id),
            "serviceName": to_json_value(service_name),
            "result": to_json_value(result),
        })

    # ------------------------
    # Leveled writes
    # ------------------------
    def error(self, message: str, ref_id: Any = None, service_name: Any = "", result: Any = None) -> None:
        self._write(logging.ERROR, message, ref_id, service_name, result)

    def warn(self, message: str, ref_id: Any = None, service_name: Any = "", result: Any = None) -> None:
        self._write(logging.WARNING, message, ref_id, service_name, result)

    warning = warn

    def info(self, message: str, ref_id: Any = None, service_name: Any = "", result: Any = None) -> None:
        self._write(logging.INFO, message, ref_id, service_name, result)

    def debug(self, message: str, ref_id: Any = None, service_name: Any = "", result: Any = None) -> None:
        self._write(logging.DEBUG, message, ref_id, service_name, result)

    # ------------------------
    # Access logging
    # ------------------------
    async def log_request(self) -> None:
        """
        Start access logging for the attached request.

        Records the start time, captures the request body (skipped for
        multipart/form-data uploads), installs a BodyLogWriter in `ctx.writer`
        and writes the "request" record. The record's output/latency/status are
        always ""/0/0: the response does not exist yet.

        Without an attached context only the start time is recorded.
        """
        self._started = monotonic()
        self._request_body = ""
        ctx = self._ctx
        if ctx is None:
            return

        if not ctx.content_type.startswith("multipart/form-data"):
            body = await ctx.read_body()
            self._request_body = body.decode("utf-8", errors="replace")

        self._response_writer = BodyLogWriter(ctx.writer)
        ctx.writer = self._response_writer

        self._emit(logging.INFO, "request", {
            "url": ctx.path,
            "input": self._request_body,
            "output": "",
            "latency": 0,
            "status": 0,
        })

    def log_response(self) -> None:
        """
        Write the "response" record for the attached request.

        The captured response body is only logged for application/json
        responses. Does nothing when no context is attached.
        """
        ctx = self._ctx
        if ctx is None:
            return

        writer = ctx.writer
        output = ""
        if writer.headers.get("content-type", "").startswith("application/json") and self._response_writer is not None:
            output = self._response_writer.text()

        self._emit(logging.INFO, "response", {
            "url": ctx.path,
            "input": self._request_body,
            "output": output,
            "latency": elapsed_ms(self._started) if self._started is not None else 0,
            "status": writer.status,
        })


def new_app_logger(level: str, name: str = DEFAULT_LOGGER_NAME) -> AppLogger:
    return AppLogger(level, name)


def get_app_logger(settings) -> AppLogger:
    """
    Build the application's base logger from Settings (level, logger name, appName field).
    """
    return new_app_logger(settings.LOG_LEVEL, settings.LOG_LOGGER_NAME).with_field(
        FieldKey.APP_NAME, settings.APP_NAME
    )


__all__ = [
    "AppLogger",
    "FieldKey",
    "parse_level",
    "new_app_logger",
    "get_app_logger",
    "DEFAULT_LOGGER_NAME",
]
