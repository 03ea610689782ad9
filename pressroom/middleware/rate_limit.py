"""
Pressroom Backend — Rate Limiting Middleware
==============================================

What:  Per-client request budgets over a sliding time window.
How:   Every client IP has two buckets, one for reads and one for writes.
       POST/PUT/PATCH/DELETE (which carry photo uploads and touch the
       storage root) draw on the smaller write budget; everything else draws
       on the read budget. An exhausted bucket answers 429 with Retry-After.

Buckets:
    "203.0.113.7:read"   ── rate_limit_requests        per rate_limit_window
    "203.0.113.7:write"  ── rate_limit_write_requests  per rate_limit_window

Scope:
    In-memory, so limits are per process. Multi-worker deployments should move
    the counters to a shared store.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from pressroom.config import settings
from pressroom.exceptions import RateLimitExceededError
from pressroom.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class SlidingWindow:
    """
    Hit timestamps per key, oldest first.

    `hit()` either records the hit and returns None, or refuses it and
    returns the whole seconds until the oldest hit leaves the window.
    """

    def __init__(self) -> None:
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def __len__(self) -> int:
        return len(self._hits)

    def hit(self, key: str, limit: int, window: float, now: float) -> Optional[int]:
        hits = self._hits[key]
        while hits and hits[0] <= now - window:
            hits.popleft()

        if len(hits) >= limit:
            return int(hits[0] + window - now) + 1

        hits.append(now)
        return None

    def prune(self, window: float, now: float) -> int:
        """Forget keys with no hit inside the window; returns how many were dropped."""
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= now - window]
        for key in stale:
            del self._hits[key]
        return len(stale)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies the read/write budgets from settings.

    Configuration (from settings):
        rate_limit_enabled:        master switch
        rate_limit_requests:       reads per window
        rate_limit_write_requests: writes per window
        rate_limit_window:         window duration in seconds
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}
    PRUNE_EVERY = 1000

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self.window = SlidingWindow()
        self._allowed = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not settings.rate_limit_enabled or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        if request.method in WRITE_METHODS:
            bucket, limit = "write", settings.rate_limit_write_requests
        else:
            bucket, limit = "read", settings.rate_limit_requests

        now = time.monotonic()
        retry_after = self.window.hit(
            f"{client_ip}:{bucket}", limit, settings.rate_limit_window, now
        )
        if retry_after is not None:
            exc = RateLimitExceededError(retry_after=retry_after, context={"bucket": bucket})
            logger.warning(
                "Rate limit exceeded for %s (%s bucket, %d per %ds)",
                client_ip,
                bucket,
                limit,
                settings.rate_limit_window,
            )
            # Exception handlers sit inside the middleware stack, so the
            # error body is built here.
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        self._allowed += 1
        if self._allowed % self.PRUNE_EVERY == 0:
            dropped = self.window.prune(settings.rate_limit_window, now)
            if dropped:
                logger.debug("Pruned %d idle rate-limit buckets", dropped)

        return await call_next(request)
