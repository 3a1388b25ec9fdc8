# src/common_service/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

This module:
 - builds a dictConfig-compatible mapping from Settings (make_dict_config)
 - applies it and prepares the log directory (setup_logging)

Configuration knobs (on your Settings object):
 - LOG_LEVEL: root level for stdlib loggers; AppLoggers use their own threshold
 - LOG_FORMAT: "json" (JsonFormatter) or "text" (ColorFormatter)
 - LOG_TO_STDOUT: when False and LOG_DIR is set, also write app.log / errors.log
 - LOG_DIR: directory for the log files
 - LOG_LOGGER_NAME: stdlib logger used by AppLogger instances

The function only reads attributes, so any duck-typed object (SimpleNamespace
in tests) works in place of Settings.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from .app_logger import parse_level
from .formatters import JsonFormatter, ColorFormatter
from .filters import RedactFilter
from .handlers import (
    FALLBACK_HANDLER_ATTR,
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)
from common_service.config.settings import Settings


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color or plain text) and "json"
      - filters: "redact"
      - handlers: console + (file, error_file) OR console + error_console
      - loggers: root, the AppLogger logger, uvicorn.error, uvicorn.access
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
        },
    }

    filters = {
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    # Invalid names in the environment fall back to INFO instead of failing dictConfig.
    root_level = logging.getLevelName(parse_level(settings.LOG_LEVEL))

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": root_level,
            },
            # AppLogger records reach the root handlers by propagation; the level
            # here only matters for code that uses this logger directly.
            settings.LOG_LOGGER_NAME: {
                "level": root_level,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": root_level,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            # The access middleware already writes request/response records.
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def _remove_fallback_handlers() -> None:
    for logger in list(logging.Logger.manager.loggerDict.values()):
        if not isinstance(logger, logging.Logger):
            continue
        for handler in list(logger.handlers):
            if getattr(handler, FALLBACK_HANDLER_ATTR, False):
                logger.removeHandler(handler)
                handler.close()


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Drop stdout fallback handlers AppLogger attached before configuration.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    _remove_fallback_handlers()
    logging.getLogger(__name__).debug(
        "logging configured", extra={"log_format": settings.LOG_FORMAT, "to_stdout": settings.LOG_TO_STDOUT}
    )
