"""
slicenshare_api.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Generate/propagate request IDs.
- Bind request metadata (path, method, user agent) into structlog contextvars.
- Emit one `request_completed` line per request with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from slicenshare_api.observability.logging import get_logger

log = get_logger(__name__)

# Browser auto-requests that would otherwise dominate access logs.
UNLOGGED_PATHS = frozenset({"/favicon.ico"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            user_agent=request.headers.get("user-agent", ""),
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            if request.url.path not in UNLOGGED_PATHS:
                log.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Sits outside the error middleware, so `unhandled_error` lines carry the request id
# and error responses still echo `x-request-id`.
