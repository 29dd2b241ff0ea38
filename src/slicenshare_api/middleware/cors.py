"""
slicenshare_api.middleware.cors

CORS policy engine.

Responsibilities:
- Resolve the allowed-origin set once from settings (`CorsPolicy.from_settings`).
- Decide allow/deny per request Origin and attach the CORS response headers.
- Answer every OPTIONS preflight directly with 200.
"""

from __future__ import annotations

from dataclasses import dataclass

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from slicenshare_api.errors import CorsRejectedError
from slicenshare_api.observability.logging import get_logger
from slicenshare_api.settings import Environment, Settings

log = get_logger(__name__)

DEVELOPMENT_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",  # Vite dev server
)
PRODUCTION_ORIGINS: tuple[str, ...] = (
    "https://slicenshare.vercel.app",
    "https://slice-nshare-server.vercel.app",
)

ALLOWED_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH")
ALLOWED_HEADERS: tuple[str, ...] = (
    "Content-Type",
    "Authorization",
    "X-Requested-With",
    "Accept",
    "Origin",
    "Access-Control-Allow-Origin",
    "Access-Control-Allow-Headers",
    "Access-Control-Allow-Methods",
)
EXPOSED_HEADERS: tuple[str, ...] = ("Content-Range", "X-Content-Range")
MAX_AGE_SECONDS = 86400

# 200 rather than 204: some legacy browsers treat a 204 preflight as a failure.
PREFLIGHT_STATUS = 200


@dataclass(frozen=True, slots=True)
class CorsPolicy:
    allowed_origins: tuple[str, ...]
    environment: Environment
    allow_any_origin_in_development: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> CorsPolicy:
        candidates = [
            *DEVELOPMENT_ORIGINS,
            f"http://localhost:{settings.port}",
            *PRODUCTION_ORIGINS,
            settings.production_client_url,
            settings.production_api_url,
            *settings.cors_extra_origins,
        ]
        # Unset entries are dropped; order is kept for readable startup logs.
        origins = tuple(dict.fromkeys(o for o in candidates if o))
        return cls(
            allowed_origins=origins,
            environment=settings.environment,
            allow_any_origin_in_development=settings.allow_any_origin_in_development,
        )

    @property
    def development_bypass_active(self) -> bool:
        return (
            self.environment is Environment.development and self.allow_any_origin_in_development
        )

    def is_allowed(self, origin: str | None) -> bool:
        # Non-browser clients (curl, mobile apps) send no Origin.
        if not origin:
            return True
        return origin in self.allowed_origins or self.development_bypass_active

    def response_headers(self, origin: str | None) -> dict[str, str]:
        headers = {
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": ",".join(ALLOWED_METHODS),
            "Access-Control-Allow-Headers": ",".join(ALLOWED_HEADERS),
            "Access-Control-Expose-Headers": ",".join(EXPOSED_HEADERS),
            "Access-Control-Max-Age": str(MAX_AGE_SECONDS),
        }
        if origin:
            headers["Access-Control-Allow-Origin"] = origin
        return headers


class CorsMiddleware:
    def __init__(self, app: ASGIApp, *, policy: CorsPolicy) -> None:
        self.app = app
        self.policy = policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if not self.policy.is_allowed(origin):
            log.warning("cors_origin_blocked", origin=origin)
            raise CorsRejectedError(origin)

        cors_headers = self.policy.response_headers(origin)
        # Lets the error middleware keep CORS headers on error responses, so
        # browsers can read the error body.
        scope.setdefault("state", {})["cors_headers"] = cors_headers

        if scope["method"] == "OPTIONS":
            response = Response(status_code=PREFLIGHT_STATUS, headers=cors_headers)
            response.headers.add_vary_header("Origin")
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.update(cors_headers)
                headers.add_vary_header("Origin")
            await send(message)

        await self.app(scope, receive, send_with_cors)


# --- Module Notes -----------------------------------------------------------
# The development bypass accepts any Origin. `api.app.create_app` logs a warning
# whenever it is active; a deployed instance with NODE_ENV=development is open to
# every origin with credentials.
