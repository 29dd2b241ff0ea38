"""
slicenshare_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for the database handle.
- Encapsulate app.state access patterns (MongoConnection).
"""

from __future__ import annotations

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from slicenshare_api.db.connection import MongoConnection


def connection_from_app(request: Request) -> MongoConnection:
    # The holder is created in `slicenshare_api.api.app.create_app`.
    return request.app.state.mongo  # type: ignore[attr-defined]


async def get_database(
    connection: MongoConnection = Depends(connection_from_app),
) -> AsyncIOMotorDatabase:
    # No-op once connected; otherwise this is the lazy bootstrap for deployments
    # that skip connecting at startup.
    await connection.connect()
    return connection.database


# --- Module Notes -----------------------------------------------------------
# Route groups declare `db: AsyncIOMotorDatabase = Depends(get_database)`.
