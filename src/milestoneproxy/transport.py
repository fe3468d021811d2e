"""HTTP transport pieces: CORS policy, SPA static files and the uvicorn runner."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

if TYPE_CHECKING:
    from starlette.applications import Starlette
    from starlette.responses import Response
    from starlette.types import Scope

    from milestoneproxy.config import ServerSettings, Settings

log = structlog.get_logger()

SPA_ENTRY_DOCUMENT = "index.html"


class SPAStaticFiles(StaticFiles):
    """Static files that fall back to the SPA entry document.

    Any path with no matching file is answered with ``index.html`` so the
    frontend's client-side router can handle it.
    """

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response(SPA_ENTRY_DOCUMENT, scope)


def build_static_app(static_dir: str) -> SPAStaticFiles | None:
    """Return the SPA static app, or None if the directory is missing."""
    directory = Path(static_dir)
    if not (directory / SPA_ENTRY_DOCUMENT).is_file():
        log.warning("static_dir_missing", static_dir=str(directory))
        return None
    return SPAStaticFiles(directory=directory, html=True)


def cors_middleware(server: ServerSettings) -> Middleware:
    return Middleware(
        CORSMiddleware,
        allow_origins=server.origin_list,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


def allow_origin_header(server: ServerSettings, request_origin: str | None) -> str:
    """Value for Access-Control-Allow-Origin on proxied documents.

    Wildcard config yields ``*``; otherwise the request origin is echoed when
    it is allowed, and the first configured origin is used as a fallback.
    """
    origins = server.origin_list
    if origins == ["*"]:
        return "*"
    if request_origin and request_origin in origins:
        return request_origin
    return origins[0]


def run_http_server(app: Starlette, settings: Settings) -> None:
    """Serve the application with uvicorn."""
    log.info(
        "http_server_starting",
        host=settings.server.host,
        port=settings.server.port,
        allowed_origins=settings.server.origin_list,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )
