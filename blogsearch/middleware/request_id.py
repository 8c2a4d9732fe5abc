"""Request ID middleware (raw ASGI).

Each HTTP request and each live-search WebSocket connection gets an id: the
client's X-Request-ID when it is safe to log, a fresh UUID otherwise. The id
is bound in shared.context for log lines, stored on request.state for error
bodies, added to the current span, and echoed on HTTP responses.
"""

import re
import uuid
from typing import Callable

from blogsearch.shared.context import reset_request_id, set_request_id
from blogsearch.shared.telemetry import add_span_attributes

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,%d}" % REQUEST_ID_MAX_LENGTH)


def sanitize_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it is a safe id; otherwise a new UUID."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so every HTTP request and WebSocket connection carries a request id."""
    header_key = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] not in ("http", "websocket"):
            await app(scope, receive, send)
            return

        request_id = sanitize_request_id(_header(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id
        add_span_attributes(request_id=request_id)

        async def send_with_header(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        token = set_request_id(request_id)
        try:
            if scope["type"] == "http":
                await app(scope, receive, send_with_header)
            else:
                await app(scope, receive, send)
        finally:
            reset_request_id(token)

    return asgi_app
