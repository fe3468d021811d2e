"""Integration test fixtures.

Provides a fully wired AppState (real MondayClient, DocumentFetcher and
DocumentCache over an httpx client intercepted by respx) and the Starlette
app driven through httpx's ASGI transport. No real server is started.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from milestoneproxy.cache import DocumentCache
from milestoneproxy.fetcher import DocumentFetcher
from milestoneproxy.monday import MondayClient
from milestoneproxy.server import create_app
from milestoneproxy.state import AppState

if TYPE_CHECKING:
    from milestoneproxy.config import Settings


@pytest.fixture()
async def app_state(settings: Settings):
    """AppState whose cache extracts UTF-8 text instead of parsing PDFs."""
    async with httpx.AsyncClient() as client:
        fetcher = DocumentFetcher(client, settings.documents)
        state = AppState(
            settings=settings,
            monday=MondayClient(client, settings.monday),
            monday_http_client=client,
            fetcher=fetcher,
            document_cache=DocumentCache(fetcher, extractor=bytes.decode),
            document_http_client=client,
        )
        yield state


@pytest.fixture()
def static_dir(settings: Settings):
    """Populate the configured static directory with a tiny SPA."""
    root = Path(settings.server.static_dir)
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<!doctype html><div id=app></div>", encoding="utf-8")
    (root / "assets" / "app.js").write_text("console.log('milestones')", encoding="utf-8")
    return root


@pytest.fixture()
async def client(settings: Settings, app_state: AppState, static_dir):
    """httpx client bound to the app, with app_state pre-installed."""
    app = create_app(settings)
    app.state.app_state = app_state
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as http_client:
        yield http_client
