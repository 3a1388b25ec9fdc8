# src/common_service/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; builder.make_dict_config()
registers them under the names console / error_console / file / error_file.

Level notes:
  - console and file handlers carry no level of their own. Stdlib loggers are
    gated by the root logger level (settings.LOG_LEVEL); AppLogger applies its
    own per-instance threshold and bypasses logger levels, so a handler level
    here would silently cap every AppLogger at LOG_LEVEL.
  - the error_* handlers only take ERROR and above.

Files are plain FileHandlers: rotation is left to the host (logrotate, the
container runtime, ...).

get_fallback_handler() is the one real handler built here: AppLogger attaches it
when a record would otherwise only reach logging.lastResort.
"""

import logging
import sys
from pathlib import Path

from common_service.config.settings import Settings

from .filters import RedactFilter
from .formatters import JsonFormatter

# Marks handlers installed by get_fallback_handler(); setup_logging() removes them.
FALLBACK_HANDLER_ATTR = "_common_service_fallback"


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
        "formatter": _formatter_name(settings),
        "filters": ["redact"],
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stderr",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["redact"],
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.FileHandler",
        "formatter": _formatter_name(settings),
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "encoding": "utf-8",
        "filters": ["redact"],
    }


def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.FileHandler",
        "formatter": "json",  # keep error files structured for easier ingestion
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "encoding": "utf-8",
        "filters": ["redact"],
    }


def get_fallback_handler() -> logging.Handler:
    """JSON to stdout with redaction, used before setup_logging() has run."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RedactFilter())
    setattr(handler, FALLBACK_HANDLER_ATTR, True)
    return handler
