"""
tests.helpers

Shared fakes and builders for the test-suite.

Responsibilities:
- Fake motor client/factory that records connection attempts.
- App builder with an injected connection and optional test route groups.
- In-process httpx client bound to an app.
- ASGI lifespan driver for startup/shutdown hooks.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
from fastapi import APIRouter, Body, Depends
from pymongo.errors import ServerSelectionTimeoutError

from slicenshare_api.api.app import create_app
from slicenshare_api.api.deps import get_database
from slicenshare_api.api.routes import RouteGroup
from slicenshare_api.db.connection import MongoConnection
from slicenshare_api.settings import Settings


class FakeAdmin:
    def __init__(self, client: FakeMongoClient) -> None:
        self._client = client

    async def command(self, name: str) -> dict[str, Any]:
        self._client.commands.append(name)
        if self._client.fail:
            raise ServerSelectionTimeoutError("no servers available")
        return {"ok": 1}


class FakeMongoClient:
    def __init__(self, uri: str, *, fail: bool = False, **options: Any) -> None:
        self.uri = uri
        self.options = options
        self.fail = fail
        self.closed = False
        self.commands: list[str] = []
        self.admin = FakeAdmin(self)

    def __getitem__(self, name: str) -> dict[str, str]:
        return {"database": name}

    def close(self) -> None:
        self.closed = True


class FakeClientFactory:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.clients: list[FakeMongoClient] = []

    def __call__(self, uri: str, **options: Any) -> FakeMongoClient:
        client = FakeMongoClient(uri, fail=self.fail, **options)
        self.clients.append(client)
        return client


def make_settings(static_dir: Path | str, **overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "environment": "production",
        "port": 5000,
        "static_dir": str(static_dir),
        "connect_on_startup": False,
        "mongo_username": "slicer",
        "mongo_password": "secret",
        "mongo_cluster": "cluster0.example.mongodb.net",
        "mongo_db_name": "slicenshare",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def storefront_test_group() -> RouteGroup:
    router = APIRouter()

    @router.get("/boom")
    async def boom() -> dict[str, str]:
        raise RuntimeError("kaboom")

    @router.get("/search")
    async def search(q: str = "") -> dict[str, str]:
        return {"q": q}

    @router.post("/echo")
    async def echo(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        return payload

    return RouteGroup("products", "/products", router)


def build_app(
    settings: Settings,
    *,
    factory: FakeClientFactory | None = None,
    route_groups: list[RouteGroup] | None = None,
):
    connection = MongoConnection(settings=settings, client_factory=factory or FakeClientFactory())
    groups = [storefront_test_group()] if route_groups is None else route_groups
    return create_app(settings=settings, connection=connection, route_groups=groups)


def asgi_client(app) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


def catalogue_group() -> RouteGroup:
    router = APIRouter()

    @router.get("/catalogue")
    async def catalogue(db: Any = Depends(get_database)) -> dict[str, Any]:
        return {"db": db}

    return RouteGroup("homepage", "/homepage", router)


async def _next_message(outbox: asyncio.Queue, task: asyncio.Task) -> dict[str, Any]:
    # The app may raise instead of (or after) reporting a failure message.
    getter = asyncio.ensure_future(outbox.get())
    await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
    if getter.done():
        return getter.result()
    getter.cancel()
    task.result()
    raise RuntimeError("lifespan task ended without a message")


@asynccontextmanager
async def lifespan(app) -> AsyncIterator[None]:
    """
    Drive the app's ASGI lifespan protocol; startup errors are re-raised.
    """

    inbox: asyncio.Queue = asyncio.Queue()
    outbox: asyncio.Queue = asyncio.Queue()
    scope = {"type": "lifespan", "asgi": {"version": "3.0", "spec_version": "2.0"}, "state": {}}
    task = asyncio.create_task(app(scope, inbox.get, outbox.put))

    await inbox.put({"type": "lifespan.startup"})
    message = await _next_message(outbox, task)
    if message["type"] == "lifespan.startup.failed":
        await task
        raise RuntimeError(message.get("message", "startup failed"))

    try:
        yield
    finally:
        await inbox.put({"type": "lifespan.shutdown"})
        await _next_message(outbox, task)
        await task
