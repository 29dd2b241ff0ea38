"""
slicenshare_api.api.routes

Route group table and mounting.

Responsibilities:
- Declare every storefront route group with its prefix under `/api/v1`.
- Mount enabled groups on the app; skip (and log) disabled ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import APIRouter, FastAPI

from slicenshare_api.api.routers import auth, cart, checkout, homepage, products, streamers
from slicenshare_api.observability.logging import get_logger

log = get_logger(__name__)

API_V1_PREFIX = "/api/v1"


@dataclass(frozen=True, slots=True)
class RouteGroup:
    name: str
    prefix: str
    router: APIRouter
    enabled: bool = True

    @property
    def mount_path(self) -> str:
        return f"{API_V1_PREFIX}{self.prefix}"


def default_route_groups() -> tuple[RouteGroup, ...]:
    return (
        RouteGroup("homepage", "/homepage", homepage.router),
        RouteGroup("auth", "/auth", auth.router),
        RouteGroup("products", "/products", products.router),
        # Disabled until user authentication is complete.
        RouteGroup("streamers", "/streamers", streamers.router, enabled=False),
        RouteGroup("cart", "/cart", cart.router),
        RouteGroup("checkout", "/checkout", checkout.router),
    )


def mount_route_groups(app: FastAPI, groups: Iterable[RouteGroup]) -> list[str]:
    mounted: list[str] = []
    for group in groups:
        if not group.enabled:
            log.info("route_group_disabled", group=group.name, prefix=group.mount_path)
            continue
        app.include_router(group.router, prefix=group.mount_path, tags=[group.name])
        mounted.append(group.mount_path)
    return mounted


# --- Module Notes -----------------------------------------------------------
# Enabling the streamer group is a one-line change in `default_route_groups`
# once user authentication ships.
