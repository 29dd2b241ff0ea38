"""
slicenshare_api.api.routers.root

Service endpoints owned by the entrypoint itself.

Responsibilities:
- `GET /api/v1`: static HTML welcome page.
- `GET /favicon.ico`: empty 204 so browser auto-requests don't produce 404 noise.
"""

from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import HTMLResponse, JSONResponse, Response

from slicenshare_api.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()

WELCOME_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>API v1 Response</title>
  <style>
    body {
      font-family: Arial, sans-serif;
      display: flex;
      justify-content: center;
      align-items: center;
      height: 100vh;
      background-color: #f4f4f4;
      margin: 0;
    }
    .container {
      text-align: center;
      padding: 20px;
      border-radius: 8px;
      background-color: #ffffff;
      box-shadow: 0 0 10px rgba(0, 0, 0, 0.1);
    }
    h1 { color: #333; }
    p { color: #555; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Welcome to SliceNShare API v1</h1>
    <p>This is the HTML response for the <i>/api/v1</i> endpoint.</p>
  </div>
</body>
</html>
"""


def _internal_error() -> JSONResponse:
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


def render_welcome_page() -> str:
    return WELCOME_PAGE


@router.get("/api/v1", response_class=HTMLResponse, include_in_schema=False)
async def welcome() -> Response:
    try:
        return HTMLResponse(render_welcome_page())
    except Exception:
        log.exception("welcome_page_failed")
        return _internal_error()


@router.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    try:
        return Response(status_code=204)
    except Exception:
        log.exception("favicon_failed")
        return _internal_error()


# --- Module Notes -----------------------------------------------------------
# The local guards only cover these two handlers; route groups rely on the
# global error middleware.
