"""
slicenshare_api.api.routers.checkout

Checkout and order placement endpoints.

The handlers are owned by the storefront team; the app factory only relies on
`router` being an APIRouter whose paths are relative to its mount prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


# --- Module Notes -----------------------------------------------------------
# Mounted at `/api/v1/checkout` by `api.routes.default_route_groups`.
