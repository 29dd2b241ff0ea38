"""
slicenshare_api.api.routers.auth

Sign-up, login and session endpoints.

The handlers are owned by the storefront team; the app factory only relies on
`router` being an APIRouter whose paths are relative to its mount prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


# --- Module Notes -----------------------------------------------------------
# Mounted at `/api/v1/auth` by `api.routes.default_route_groups`.
