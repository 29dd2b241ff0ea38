"""
slicenshare_api.errors

Application error taxonomy.

Responsibilities:
- Give every error the service raises on purpose a declared HTTP status.
- Keep client-visible messages next to the error type that produces them.
"""

from __future__ import annotations


class AppError(Exception):
    """
    Base class for errors consumed by the global error middleware.
    The middleware responds with `status_code` and `message`.
    """

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class CorsRejectedError(AppError):
    status_code = 403
    message = "Not allowed by CORS"

    def __init__(self, origin: str) -> None:
        super().__init__()
        self.origin = origin


class MalformedJsonError(AppError):
    status_code = 400
    message = "Malformed JSON body"


class PayloadTooLargeError(AppError):
    status_code = 413
    message = "Request body too large"


class DatabaseConnectionError(AppError):
    status_code = 503
    message = "Database unavailable"


class DatabaseNotReadyError(AppError):
    status_code = 503
    message = "Database connection has not been established"


# --- Module Notes -----------------------------------------------------------
# Errors without a declared status (plain exceptions) surface as 500s.
