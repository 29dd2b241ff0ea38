"""
slicenshare_api.middleware.sanitize

Script-injection sanitization of request input.

Responsibilities:
- Escape `<` and trim whitespace in every query-string value.
- Do the same for every string inside a JSON request body.
- Reject JSON bodies whose raw size exceeds the configured limit (413).
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl, urlencode

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from slicenshare_api.middleware.body import is_json_request, read_body, replay_body

DEFAULT_MAX_BODY_BYTES = 100 * 1024


def clean_text(value: str) -> str:
    return value.replace("<", "&lt;").strip()


def clean_value(value: Any) -> Any:
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, list):
        return [clean_value(item) for item in value]
    if isinstance(value, dict):
        return {key: clean_value(item) for key, item in value.items()}
    return value


def clean_query_string(raw: bytes) -> bytes:
    pairs = parse_qsl(raw.decode("latin-1"), keep_blank_values=True)
    cleaned = [(key, clean_text(value)) for key, value in pairs]
    if cleaned == pairs:
        # Untouched input keeps its original encoding.
        return raw
    return urlencode(cleaned).encode("latin-1")


def clean_json_body(body: bytes) -> bytes:
    """
    Returns the sanitized body, or `body` unchanged when it is not valid JSON
    (`JsonBodyMiddleware` rejects those further down the chain).
    """

    if not body.strip():
        return body
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    cleaned = clean_value(payload)
    if cleaned == payload:
        return body
    return json.dumps(cleaned, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class SanitizeInputMiddleware:
    def __init__(self, app: ASGIApp, *, max_body_bytes: int = DEFAULT_MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_string = scope.get("query_string", b"")
        if query_string:
            scope["query_string"] = clean_query_string(query_string)

        if is_json_request(scope):
            raw = await read_body(receive, max_bytes=self.max_body_bytes)
            body = clean_json_body(raw)
            MutableHeaders(scope=scope)["content-length"] = str(len(body))
            receive = replay_body(body, receive)

        await self.app(scope, receive, send)


# --- Module Notes -----------------------------------------------------------
# Scope is modified in place: outer middleware share the same scope dict.
