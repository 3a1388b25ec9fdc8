"""
Core pytest configuration for the test suite.

Provides the ASGI building blocks the logging tests share:

- `make_scope()`     : a minimal HTTP scope (method, path, headers)
- `make_receive()`   : a receive callable delivering one request body
- `SendRecorder`     : a send callable recording every ASGI message
- `make_context`     : fixture returning (RequestContext, SendRecorder) factories
- `app_records`      : fixture returning the AppLogger records captured by caplog

AppLogger writes through `Logger.handle()`, which skips logger levels, so
caplog sees every record an AppLogger lets through regardless of how the root
logger is configured.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from common_service.core.logging.app_logger import DEFAULT_LOGGER_NAME
from common_service.core.logging.context import RequestContext


# -------------------------------
# ASGI helpers
# -------------------------------
def make_scope(method: str = "POST", path: str = "/orders", headers: dict[str, str] | None = None) -> dict:
    raw_headers = [
        (k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()
    ]
    return {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "root_path": "",
        "query_string": b"",
        "headers": raw_headers,
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
    }


def make_receive(body: bytes = b""):
    messages: list[dict[str, Any]] = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    return receive


class SendRecorder:
    """Stand-in for the server's send: records messages, returns a marker value."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> str:
        self.messages.append(message)
        return "sent"

    @property
    def body(self) -> bytes:
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )


async def start_response(writer, status: int = 200, content_type: str = "application/json") -> None:
    await writer({
        "type": "http.response.start",
        "status": status,
        "headers": [(b"content-type", content_type.encode("latin-1"))],
    })


# -------------------------------
# Fixtures
# -------------------------------
@pytest.fixture
def make_context():
    """
    Factory fixture: make_context(body=b"", headers=None, method="POST", path="/orders")
    returns (ctx, recorder).
    """

    def _make(body: bytes = b"", headers: dict[str, str] | None = None, method: str = "POST", path: str = "/orders"):
        recorder = SendRecorder()
        ctx = RequestContext(make_scope(method, path, headers), make_receive(body), recorder)
        return ctx, recorder

    return _make


@pytest.fixture
def app_records(caplog: pytest.LogCaptureFixture):
    """
    Return a callable listing the captured AppLogger records, optionally by message.
    """
    caplog.set_level(logging.DEBUG, logger=DEFAULT_LOGGER_NAME)

    def _records(message: str | None = None) -> list[logging.LogRecord]:
        return [
            r for r in caplog.records
            if r.name == DEFAULT_LOGGER_NAME and (message is None or r.getMessage() == message)
        ]

    return _records


@pytest.fixture
def restore_root_logging():
    """
    Snapshot the root logger's handlers and level and put them back afterwards.

    setup_logging() applies dictConfig, which replaces the root handlers
    (including pytest's capture handlers) for the rest of the session.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
