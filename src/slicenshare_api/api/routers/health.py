"""
slicenshare_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/api/v1/healthz`).
- Provide readiness probe (`/api/v1/readyz`) with MongoDB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from slicenshare_api.api.deps import connection_from_app
from slicenshare_api.db.connection import MongoConnection

router = APIRouter(prefix="/api/v1")


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(connection: MongoConnection = Depends(connection_from_app)) -> dict[str, str]:
    # Readiness: connects lazily if startup skipped it, then pings.
    await connection.connect()
    await connection.ping()
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# A failed ping raises DatabaseConnectionError, which the error middleware renders as 503.
