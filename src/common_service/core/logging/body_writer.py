# src/common_service/core/logging/body_writer.py
"""
Response writers for access logging.

An ASGI application "writes" its response by awaiting `send(message)` with an
`http.response.start` message (status + headers) followed by one or more
`http.response.body` messages. The classes here wrap that `send` callable:

  - ResponseWriter: forwards every message and remembers the status code and
    headers from `http.response.start`, so they can be read after the handler
    has finished.
  - BodyLogWriter: decorates another writer and mirrors every body chunk into an
    in-memory buffer before forwarding it unchanged. What the wrapped writer
    returns (or raises) is exactly what the caller sees.

Both are plain awaitable callables, so they can be handed to the downstream app
in place of the server's `send`.

The capture buffer has no size limit: a handler streaming a very large body will
keep all of it in memory until the request ends.
"""

from typing import Any, Awaitable, Callable, MutableMapping

from starlette.datastructures import Headers

Message = MutableMapping[str, Any]
Send = Callable[[Message], Awaitable[None]]


class ResponseWriter:
    """
    Thin wrapper around an ASGI `send` callable that tracks response metadata.

    `status` is 0 and `headers` is empty until `http.response.start` has been sent.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status = 0
        self._headers = Headers()

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> Headers:
        return self._headers

    async def __call__(self, message: Message) -> Any:
        if message["type"] == "http.response.start":
            self._status = int(message.get("status", 0))
            self._headers = Headers(raw=list(message.get("headers") or []))
        return await self._send(message)

    async def write(self, data: bytes, *, more_body: bool = True) -> Any:
        """Send one body chunk."""
        return await self({"type": "http.response.body", "body": data, "more_body": more_body})


class BodyLogWriter(ResponseWriter):
    """
    Writer decorator that captures the response body while passing it through.

    Status and headers are read from the wrapped writer, so wrapping after the
    response has started still reports the real values.
    """

    def __init__(self, writer: ResponseWriter) -> None:
        super().__init__(writer)
        self.writer = writer
        self._buffer = bytearray()

    @property
    def status(self) -> int:
        return self.writer.status

    @property
    def headers(self) -> Headers:
        return self.writer.headers

    @property
    def body(self) -> bytes:
        return bytes(self._buffer)

    def text(self) -> str:
        return self._buffer.decode("utf-8", errors="replace")

    async def __call__(self, message: Message) -> Any:
        if message["type"] == "http.response.body":
            self._buffer.extend(message.get("body", b""))
        return await self.writer(message)


__all__ = ["ResponseWriter", "BodyLogWriter"]
