"""
Pressroom Backend — Request ID Middleware
===========================================

What:  Gives each request a correlation ID, visible in every log line written
       while it runs, in error bodies and in the X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it looks like an ID
       (letters, digits, `.`, `_`, `-`; at most 64 chars); anything else is
       replaced by a fresh 8-char ID so header values never reach the logs
       unchecked. The ID lives in a ContextVar and in request.state.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_request_id(value: str | None) -> str:
    """The client's ID if it is well-formed, otherwise a new one."""
    if value and _VALID_REQUEST_ID.fullmatch(value):
        return value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Outermost application middleware: everything below it sees the ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        # Read back by the catch-all error handler, which runs outside this middleware
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
