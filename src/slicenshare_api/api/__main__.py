"""
slicenshare_api.api.__main__

Entrypoint for running the FastAPI application via `python -m slicenshare_api.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from slicenshare_api.api.app import create_app
from slicenshare_api.observability.logging import get_logger
from slicenshare_api.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    log.info("server_starting", port=settings.port, base_url=settings.base_url)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# A database failure during startup propagates out of the startup hook; uvicorn then
# refuses to serve and exits non-zero.
