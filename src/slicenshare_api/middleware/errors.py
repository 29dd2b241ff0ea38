"""
slicenshare_api.middleware.errors

Fallback handlers: the global error middleware and the JSON error renderers.

Responsibilities:
- Turn any error that escapes the routes or inner middleware into `{"error": ...}`.
- Include stack traces only in development.
- Render HTTPException / validation errors (including the router's 404) in the same shape.
"""

from __future__ import annotations

import traceback
from typing import Any

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from slicenshare_api.errors import AppError
from slicenshare_api.observability.logging import get_logger
from slicenshare_api.settings import Environment

log = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def error_body(exc: BaseException, *, environment: Environment) -> dict[str, Any]:
    if isinstance(exc, AppError):
        message = exc.message
    else:
        message = str(exc) or INTERNAL_ERROR_MESSAGE
    body: dict[str, Any] = {"error": message}
    # Never leak stack traces outside development.
    if environment is Environment.development:
        body["stack"] = "".join(traceback.format_exception(exc))
    return body


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Single place that decides client-visible status and message for errors
    nothing else handled.
    """

    def __init__(self, app: ASGIApp, *, environment: Environment) -> None:
        super().__init__(app)
        self.environment = environment

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None) or 500
            if status_code >= 500:
                log.exception("unhandled_error", status_code=status_code)
            else:
                log.warning("request_rejected", status_code=status_code, error=str(exc))

            response = JSONResponse(
                error_body(exc, environment=self.environment),
                status_code=status_code,
            )
            cors_headers = getattr(request.state, "cors_headers", None)
            if cors_headers:
                response.headers.update(cors_headers)
                response.headers.add_vary_header("Origin")
            return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    headers = getattr(exc, "headers", None)
    if exc.status_code in (204, 304):
        return Response(status_code=exc.status_code, headers=headers)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    # Keep the {"error": ...} shape: report the first failing field in the message.
    errors = exc.errors()
    message = "Validation failed"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Validation failed: {location}: {first.get('msg', 'invalid')}"
    return JSONResponse({"error": message}, status_code=422)


# --- Module Notes -----------------------------------------------------------
# HTTPException is handled inside the CORS layer by FastAPI's exception middleware,
# so those responses carry CORS headers without help. Errors raised by middleware
# (CORS rejection, malformed JSON) or unhandled route errors reach ErrorHandlerMiddleware.
