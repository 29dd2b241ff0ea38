"""
slicenshare_api.middleware.body

ASGI request body helpers shared by the body-inspecting middleware.
"""

from __future__ import annotations

from starlette.datastructures import Headers
from starlette.types import Message, Receive, Scope

from slicenshare_api.errors import PayloadTooLargeError


def is_json_request(scope: Scope) -> bool:
    content_type = Headers(scope=scope).get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_body(receive: Receive, *, max_bytes: int | None = None) -> bytes:
    """
    Buffer the request body. With `max_bytes`, stops reading as soon as the raw
    body exceeds it and raises `PayloadTooLargeError`.
    """

    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if max_bytes is not None and size > max_bytes:
            raise PayloadTooLargeError()
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def replay_body(body: bytes, receive: Receive) -> Receive:
    """
    Wrap `receive` so the next reader sees `body` as a single message, then
    falls through to the real channel (disconnect notifications).
    """

    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


# --- Module Notes -----------------------------------------------------------
# The size limit applies to the bytes the client sent, before sanitization
# rewrites (and may lengthen) the body.
