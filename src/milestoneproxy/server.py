"""HTTP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState in the Starlette lifespan
- Register routes and map MilestoneProxyError to JSON responses
- Serve the static frontend and start uvicorn
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Mount, Route

import milestoneproxy.handlers.milestones as h_milestones
import milestoneproxy.handlers.pdf_proxy as h_pdf_proxy
import milestoneproxy.handlers.pdf_search as h_pdf_search
from milestoneproxy import __version__
from milestoneproxy.cache import DocumentCache
from milestoneproxy.config import Settings
from milestoneproxy.errors import MilestoneProxyError
from milestoneproxy.fetcher import DocumentFetcher, build_http_client
from milestoneproxy.monday import MondayClient
from milestoneproxy.state import AppState
from milestoneproxy.transport import (
    allow_origin_header,
    build_static_app,
    cors_middleware,
    run_http_server,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request

log = structlog.get_logger()

PROXY_CACHE_CONTROL = "public, max-age=3600"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire clients, fetcher and cache from settings."""
    monday_http_client = build_http_client(settings.monday.timeout_seconds)
    document_http_client = build_http_client(settings.documents.timeout_seconds)

    fetcher = DocumentFetcher(document_http_client, settings.documents)
    document_cache = DocumentCache(
        fetcher,
        ttl=timedelta(seconds=settings.documents.ttl_seconds),
        max_entries=settings.documents.max_entries,
    )

    return AppState(
        settings=settings,
        monday=MondayClient(monday_http_client, settings.monday),
        monday_http_client=monday_http_client,
        fetcher=fetcher,
        document_cache=document_cache,
        document_http_client=document_http_client,
    )


def _app_state(request: Request) -> AppState:
    return request.app.state.app_state


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _error_response(route: str, error: MilestoneProxyError) -> JSONResponse:
    log.warning(
        "route_error",
        route=route,
        code=error.code,
        message=error.message,
        suggestion=error.suggestion,
        recoverable=error.recoverable,
    )
    return JSONResponse(error.to_dict(), status_code=error.status_code)


async def _guarded(route: str, call: Callable[[], Awaitable[Response]]) -> Response:
    """Run a route body, converting every failure into a JSON response."""
    try:
        return await call()
    except MilestoneProxyError as exc:
        return _error_response(route, exc)
    except Exception:
        log.error("route_unexpected_error", route=route, exc_info=True)
        return JSONResponse({"success": False, "error": "Internal server error"}, status_code=500)


async def milestones(request: Request) -> Response:
    async def call() -> Response:
        return JSONResponse(await h_milestones.handle(_app_state(request)))

    return await _guarded("milestones", call)


async def pdf_search(request: Request) -> Response:
    async def call() -> Response:
        result = await h_pdf_search.handle(
            request.query_params.get("url"),
            request.query_params.get("q"),
            _app_state(request),
        )
        return JSONResponse(result)

    return await _guarded("pdf_search", call)


async def pdf_proxy(request: Request) -> Response:
    async def call() -> Response:
        state = _app_state(request)
        document = await h_pdf_proxy.handle(request.query_params.get("url"), state)
        return Response(
            content=document.content,
            media_type=document.content_type,
            headers={
                "Cache-Control": PROXY_CACHE_CONTROL,
                "Access-Control-Allow-Origin": allow_origin_header(
                    state.settings.server, request.headers.get("origin")
                ),
            },
        )

    return await _guarded("pdf_proxy", call)


async def healthz(request: Request) -> Response:
    return PlainTextResponse("ok")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> Starlette:
    """Build the Starlette application.

    The lifespan creates AppState and stores it on ``app.state.app_state``;
    tests may assign a prepared AppState there instead.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        state = build_state(settings)
        app.state.app_state = state
        log.info(
            "server_started",
            version=__version__,
            monday_configured=settings.monday.configured,
            document_ttl_seconds=settings.documents.ttl_seconds,
        )
        try:
            yield
        finally:
            if state.monday_http_client is not None:
                await state.monday_http_client.aclose()
            if state.document_http_client is not None:
                await state.document_http_client.aclose()
            log.info("server_stopping")

    routes: list[Route | Mount] = [
        Route("/api/milestones", milestones, methods=["GET"]),
        Route("/api/pdf-search", pdf_search, methods=["GET"]),
        Route("/api/pdf-proxy", pdf_proxy, methods=["GET"]),
        Route("/healthz", healthz, methods=["GET"]),
    ]
    # Must come after the API routes: it answers every unmatched path.
    static_app = build_static_app(settings.server.static_dir)
    if static_app is not None:
        routes.append(Mount("/", app=static_app, name="static"))

    return Starlette(
        routes=routes,
        middleware=[cors_middleware(settings.server)],
        lifespan=lifespan,
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)
    log.info("server_starting", version=__version__)

    run_http_server(create_app(settings), settings)


if __name__ == "__main__":
    main()
