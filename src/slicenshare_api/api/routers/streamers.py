"""
slicenshare_api.api.routers.streamers

Streamer profile endpoints. Not mounted until user authentication is complete.

The handlers are owned by the storefront team; the app factory only relies on
`router` being an APIRouter whose paths are relative to its mount prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


# --- Module Notes -----------------------------------------------------------
# Declared (disabled) in `api.routes.default_route_groups`; requests to
# `/api/v1/streamers` fall through to the 404 handler until it is enabled.
