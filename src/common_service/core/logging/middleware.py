# src/common_service/core/logging/middleware.py
"""
HTTP middleware for contextual logging.

SessionContextMiddleware (Starlette BaseHTTPMiddleware)
-------------------------------------------------------
Copies the `X-Session-ID` / `X-Customer-ID` request headers into the
request-scoped store (`request.state.sid` / `request.state.custID`). AppLogger
reads those two keys on every write, so any record written while handling the
request carries them. The values are echoed back on the response.

AccessLogMiddleware (pure ASGI)
-------------------------------
Writes a "request" and a "response" record per HTTP request:

  1. build a per-request logger: base_logger.clone() plus the configured fields
  2. attach a RequestContext and `await log_request()` (captures the request
     body and swaps a BodyLogWriter into ctx.writer)
  3. run the app with ctx.receive / ctx.writer
  4. `log_response()` in a finally block, so the record is still written when
     the app raises; the exception itself propagates unchanged

This one is pure ASGI rather than BaseHTTPMiddleware because it has to sit on
the `send` path to see the response body as it is written.

The per-request logger is stored as `request.state.logger`; endpoints can pick
it up with `get_request_logger(request)` to write records that carry the same
sid / custID and fields.

Register SessionContextMiddleware last so it runs first (outermost):

    app.add_middleware(AccessLogMiddleware, logger=base_logger)
    app.add_middleware(SessionContextMiddleware)
"""

from typing import Mapping

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from .app_logger import AppLogger, new_app_logger
from .context import CUSTOMER_ID_KEY, SESSION_ID_KEY, RequestContext

SESSION_ID_HEADER = "X-Session-ID"
CUSTOMER_ID_HEADER = "X-Customer-ID"
REQUEST_LOGGER_KEY = "logger"


class SessionContextMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that exposes session and customer ids to the logger.

    Missing headers leave the keys unset, which keeps sid / custID out of the records.
    """

    async def dispatch(self, request: Request, call_next):
        sid = request.headers.get(SESSION_ID_HEADER, "")
        cust_id = request.headers.get(CUSTOMER_ID_HEADER, "")

        if sid:
            setattr(request.state, SESSION_ID_KEY, sid)
        if cust_id:
            setattr(request.state, CUSTOMER_ID_KEY, cust_id)

        response = await call_next(request)

        if sid:
            response.headers[SESSION_ID_HEADER] = sid
        if cust_id:
            response.headers[CUSTOMER_ID_HEADER] = cust_id
        return response


class AccessLogMiddleware:
    """
    ASGI middleware writing request/response access records through an AppLogger.

    Args:
        app: the wrapped ASGI application.
        logger: base logger; cloned per request. Defaults to an INFO logger.
        fields: static fields re-applied to every per-request logger
            (clone() drops fields by design). Defaults to the base logger's fields.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        logger: AppLogger | None = None,
        fields: Mapping[str, str] | None = None,
    ) -> None:
        self.app = app
        self.logger = logger if logger is not None else new_app_logger("INFO")
        self.fields = dict(fields) if fields is not None else self.logger.fields

    def request_logger(self, ctx: RequestContext) -> AppLogger:
        log = self.logger.clone()
        for key, value in self.fields.items():
            log.with_field(key, value)
        return log.with_context(ctx)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = RequestContext(scope, receive, send)
        log = self.request_logger(ctx)
        ctx.set(REQUEST_LOGGER_KEY, log)

        await log.log_request()
        try:
            await self.app(scope, ctx.receive, ctx.writer)
        finally:
            log.log_response()


def get_request_logger(request: Request, default: AppLogger | None = None) -> AppLogger | None:
    """
    Return the per-request AppLogger installed by AccessLogMiddleware, or `default`.
    """
    return getattr(request.state, REQUEST_LOGGER_KEY, default)
