"""
slicenshare_api.middleware.json_body

JSON body validation.

Responsibilities:
- Reject JSON-typed requests whose body does not decode (400).
"""

from __future__ import annotations

import json

from starlette.types import ASGIApp, Receive, Scope, Send

from slicenshare_api.errors import MalformedJsonError
from slicenshare_api.middleware.body import is_json_request, read_body, replay_body
from slicenshare_api.observability.logging import get_logger

log = get_logger(__name__)


class JsonBodyMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not is_json_request(scope):
            await self.app(scope, receive, send)
            return

        body = await read_body(receive)
        if body.strip():
            try:
                json.loads(body)
            except ValueError as e:
                log.info("json_body_malformed", error=str(e))
                raise MalformedJsonError() from e

        await self.app(scope, replay_body(body, receive), send)


# --- Module Notes -----------------------------------------------------------
# Route handlers still parse the body themselves (FastAPI models); this layer
# only guarantees they never see undecodable JSON. The size limit is enforced
# earlier, on the raw body, by `SanitizeInputMiddleware`.
