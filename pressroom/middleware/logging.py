"""
Pressroom Backend — Request Logging Middleware
================================================

What:  One access-log line per request on the `pressroom.access` logger.
How:   The level follows the status code (5xx → ERROR, 4xx → WARNING, else
       INFO). Alongside the concrete path the line carries the matched route
       template, so `/articles/7` and `/articles/8` aggregate as
       `/articles/{article_id}`, and the request body size, which for article
       writes is dominated by the uploaded photo.

Example:
    POST /articles 201 38.2ms 5120B [a1b2c3d4] from 127.0.0.1

Privacy:
    Logged:     method, path, route, status, duration, body size, client IP, request ID
    Not logged: request bodies, uploaded files, Authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pressroom.middleware.request_id import request_id_var

logger = logging.getLogger("pressroom.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    """Path template of the matched route; the raw path when nothing matched (404)."""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Probes run every few seconds; logging them buries real traffic
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        content_length = request.headers.get("content-length", "")
        body_bytes = int(content_length) if content_length.isdigit() else 0
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms %dB [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            body_bytes,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "route": _route_template(request),
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "body_bytes": body_bytes,
                "client_ip": client_ip,
            },
        )

        return response
