# src/common_service/core/logging/
# ├─ __init__.py            # public API
# ├─ app_logger.py          # AppLogger, FieldKey, new_app_logger(level), parse_level
# ├─ body_writer.py         # ResponseWriter, BodyLogWriter (response body capture)
# ├─ context.py             # RequestContext (ASGI request + replayable body + state store)
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # RedactFilter
# ├─ handlers.py            # handler dicts for dictConfig (console/file)
# └─ middleware.py          # AccessLogMiddleware, SessionContextMiddleware


from .app_logger import AppLogger, FieldKey, new_app_logger, get_app_logger, parse_level
from .body_writer import ResponseWriter, BodyLogWriter
from .context import RequestContext
from .builder import setup_logging, make_dict_config
from .middleware import AccessLogMiddleware, SessionContextMiddleware, get_request_logger

__all__ = [
    "AppLogger",
    "FieldKey",
    "new_app_logger",
    "get_app_logger",
    "parse_level",
    "ResponseWriter",
    "BodyLogWriter",
    "RequestContext",
    "setup_logging",
    "make_dict_config",
    "AccessLogMiddleware",
    "SessionContextMiddleware",
    "get_request_logger",
]
