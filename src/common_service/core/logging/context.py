# src/common_service/core/logging/context.py
"""
Request context seen by the contextual logger.

Wraps one ASGI request (scope / receive / send) and exposes what the logger
needs from it:

  - `request`: a Starlette Request for headers, URL and body access.
  - `receive`: the receive callable the downstream app must be given. After
    `read_body()` it is replaced by a replay callable, because an ASGI request
    body can only be read once.
  - `writer`: a replaceable slot holding the current ResponseWriter. The logger
    swaps in a BodyLogWriter here, so the app must be called with `ctx.writer`.
  - a small string key/value store backed by `request.state` (scope["state"]),
    shared with any middleware or endpoint handling the same request.
"""

from typing import Any, Awaitable, Callable, MutableMapping

from starlette.requests import ClientDisconnect, Request

from .body_writer import ResponseWriter, Send

Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]

# Keys of the request-scoped store the logger reads on every write.
SESSION_ID_KEY = "sid"
CUSTOMER_ID_KEY = "custID"


def _replay(message: Message, receive: Receive) -> Receive:
    # Hand `message` to the first caller, then fall through to the real receive.
    delivered = False

    async def replay() -> Message:
        nonlocal delivered
        if not delivered:
            delivered = True
            return message
        return await receive()

    return replay


class RequestContext:
    def __init__(self, scope: MutableMapping[str, Any], receive: Receive, send: Send) -> None:
        self.scope = scope
        self.request = Request(scope, receive)
        self.receive: Receive = receive
        self.writer: ResponseWriter = ResponseWriter(send)

    @property
    def path(self) -> str:
        return self.request.url.path

    @property
    def content_type(self) -> str:
        return self.request.headers.get("content-type", "")

    def get_string(self, key: str) -> str:
        """Return the stored value for `key`, or "" when missing or not a string."""
        value = getattr(self.request.state, key, None)
        return value if isinstance(value, str) else ""

    def set(self, key: str, value: Any) -> None:
        setattr(self.request.state, key, value)

    async def read_body(self) -> bytes:
        """
        Read the whole request body and re-issue it to the downstream app.

        A client that disconnects mid-body yields b"" and the disconnect is
        replayed downstream instead. Any other read failure also yields b"";
        the downstream app then reads from the original receive.
        """
        receive = self.receive
        try:
            body = await self.request.body()
        except ClientDisconnect:
            self.receive = _replay({"type": "http.disconnect"}, receive)
            return b""
        except Exception:
            self.receive = receive
            return b""
        self.receive = _replay({"type": "http.request", "body": body, "more_body": False}, receive)
        return body


__all__ = ["RequestContext", "SESSION_ID_KEY", "CUSTOMER_ID_KEY"]
