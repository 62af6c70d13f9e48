"""
ASGI middleware that tags every HTTP request with an ID.

The ID comes from the caller's X-Request-ID header when it looks sane,
otherwise a fresh UUID. It is bound into the structlog context for the
request's log lines and echoed back in the response headers.
"""

import uuid

from core.logging import bind_context

_HEADER = b"x-request-id"
_MAX_LENGTH = 128


def _incoming_request_id(scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name.lower() == _HEADER:
            candidate = value.decode("latin-1").strip()
            if candidate and len(candidate) <= _MAX_LENGTH:
                return candidate
    return None


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        bind_context(request_id=request_id)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = message.setdefault("headers", [])
                headers.append((_HEADER, request_id.encode("latin-1")))
            await send(message)

        await self.app(scope, receive, send_wrapper)
