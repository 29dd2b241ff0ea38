"""
slicenshare_api.api.app

FastAPI app factory for the SliceNShare API.

Responsibilities:
- Build the FastAPI application and register middleware in their fixed order.
- Mount static assets, service endpoints and the storefront route groups.
- Open and close the shared MongoDB connection.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from slicenshare_api import __version__
from slicenshare_api.api.routers.health import router as health_router
from slicenshare_api.api.routers.root import router as root_router
from slicenshare_api.api.routes import RouteGroup, default_route_groups, mount_route_groups
from slicenshare_api.api.static import PublicStaticFiles
from slicenshare_api.db.connection import MongoConnection
from slicenshare_api.middleware.cors import CorsMiddleware, CorsPolicy
from slicenshare_api.middleware.errors import (
    ErrorHandlerMiddleware,
    http_exception_handler,
    validation_exception_handler,
)
from slicenshare_api.middleware.json_body import JsonBodyMiddleware
from slicenshare_api.middleware.sanitize import SanitizeInputMiddleware
from slicenshare_api.middleware.security import SecurityHeadersMiddleware
from slicenshare_api.observability.logging import configure_logging, get_logger
from slicenshare_api.observability.middleware import RequestContextMiddleware
from slicenshare_api.settings import Settings

log = get_logger(__name__)

PUBLIC_PREFIX = "/public"


def create_app(
    *,
    settings: Settings,
    connection: MongoConnection | None = None,
    route_groups: Iterable[RouteGroup] | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        environment=settings.environment,
    )

    app = FastAPI(
        title="SliceNShare API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    cors_policy = CorsPolicy.from_settings(settings)
    if cors_policy.development_bypass_active:
        log.warning(
            "cors_development_bypass_active",
            detail="every Origin is accepted while NODE_ENV=development",
        )

    # add_middleware wraps: the last one added runs first on the way in.
    # Request order: security headers -> request context -> error handler ->
    # sanitize -> JSON body -> CORS -> routes.
    app.add_middleware(CorsMiddleware, policy=cors_policy)
    app.add_middleware(JsonBodyMiddleware)
    app.add_middleware(SanitizeInputMiddleware, max_body_bytes=settings.max_json_body_bytes)
    app.add_middleware(ErrorHandlerMiddleware, environment=settings.environment)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount(PUBLIC_PREFIX, PublicStaticFiles(directory=static_dir), name="public")
    else:
        log.warning("static_dir_missing", path=str(static_dir))

    app.include_router(root_router)
    app.include_router(health_router, tags=["health"])
    mount_route_groups(app, default_route_groups() if route_groups is None else route_groups)

    app.state.settings = settings
    app.state.mongo = connection if connection is not None else MongoConnection(settings=settings)

    @app.on_event("startup")
    async def _startup() -> None:
        log.info(
            "startup",
            env=settings.environment.value,
            port=settings.port,
            base_url=settings.base_url,
            cors_origins=list(cors_policy.allowed_origins),
        )
        if settings.connect_on_startup:
            # Re-raises on failure so the server never starts without a database.
            await app.state.mongo.connect()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        app.state.mongo.close()
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# Unmatched paths fall through to the router's 404, rendered by
# `http_exception_handler` as {"error": "Not Found"}.
