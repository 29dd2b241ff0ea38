"""
slicenshare_api.api.static

Static asset serving for `/public`.

Responsibilities:
- Serve the public directory.
- Force CSS/JS content types that some hosts mis-detect.
"""

from __future__ import annotations

import os

from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

CONTENT_TYPE_OVERRIDES: dict[str, str] = {
    ".css": "text/css",
    ".js": "application/javascript",
}


class PublicStaticFiles(StaticFiles):
    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        if isinstance(response, FileResponse):
            path = os.fspath(full_path)
            for suffix, media_type in CONTENT_TYPE_OVERRIDES.items():
                if path.endswith(suffix):
                    response.headers["content-type"] = media_type
        return response


# --- Module Notes -----------------------------------------------------------
# Missing files raise HTTPException(404) inside the mount, so they render through
# `middleware.errors.http_exception_handler` like any other 404.
