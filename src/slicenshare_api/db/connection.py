"""
slicenshare_api.db.connection

MongoDB connection bootstrap.

Responsibilities:
- Build the Atlas connection URI from settings.
- Open exactly one shared client per process, no matter how often `connect()` runs.
- Expose readiness so callers can tell a live handle from an unopened one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from slicenshare_api.errors import DatabaseConnectionError, DatabaseNotReadyError
from slicenshare_api.observability.logging import get_logger
from slicenshare_api.settings import Settings

log = get_logger(__name__)

ClientFactory = Callable[..., Any]


def build_mongo_uri(settings: Settings) -> str:
    # Credentials may contain reserved characters (@, :, /), so encode every byte.
    username = quote(settings.mongo_username, safe="")
    password = quote(settings.mongo_password, safe="")
    return (
        f"mongodb+srv://{username}:{password}"
        f"@{settings.mongo_cluster}/{settings.mongo_db_name}"
    )


class MongoConnection:
    """
    Process-wide connection holder.

    `connect()` is idempotent: once a client answered a ping, later calls return
    immediately. Failures are re-raised as `DatabaseConnectionError` and leave the
    holder not-ready, so the caller decides whether to abort startup or fail a request.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        client_factory: ClientFactory = AsyncIOMotorClient,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory
        self._client: AsyncIOMotorClient | None = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise DatabaseNotReadyError()
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self._settings.mongo_db_name]

    async def connect(self) -> None:
        if self.is_ready:
            return

        async with self._lock:
            # Another task may have finished connecting while we waited.
            if self.is_ready:
                return

            client = None
            try:
                client = self._client_factory(
                    build_mongo_uri(self._settings),
                    retryWrites=True,
                    w="majority",
                )
                await client.admin.command("ping")
            except PyMongoError as e:
                if client is not None:
                    client.close()
                log.error(
                    "mongodb_connect_failed",
                    cluster=self._settings.mongo_cluster,
                    error=str(e),
                )
                raise DatabaseConnectionError() from e

            self._client = client

        log.info(
            "mongodb_connected",
            cluster=self._settings.mongo_cluster,
            database=self._settings.mongo_db_name,
        )

    async def ping(self) -> None:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            raise DatabaseConnectionError() from e

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            log.info("mongodb_closed")


# --- Module Notes -----------------------------------------------------------
# The holder is created by `api.app.create_app` and stored on `app.state.mongo`.
# Route groups reach the database through `api.deps.get_database`.
