"""Tests for milestoneproxy.transport.

The SPA static app is exercised directly via httpx's ASGI transport so no
real server is started.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from milestoneproxy.config import ServerSettings
from milestoneproxy.transport import SPAStaticFiles, allow_origin_header, build_static_app

if TYPE_CHECKING:
    from pathlib import Path

    from starlette.types import ASGIApp


def _client(app: ASGIApp) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://localhost",
    )


@pytest.fixture()
def spa_dir(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text("<main>milestones</main>", encoding="utf-8")
    (tmp_path / "styles.css").write_text("body{}", encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# SPA static files
# ---------------------------------------------------------------------------


async def test_existing_file_served(spa_dir: Path) -> None:
    async with _client(SPAStaticFiles(directory=spa_dir, html=True)) as client:
        response = await client.get("/styles.css")
    assert response.status_code == 200
    assert response.text == "body{}"


async def test_unknown_path_falls_back_to_index(spa_dir: Path) -> None:
    async with _client(SPAStaticFiles(directory=spa_dir, html=True)) as client:
        response = await client.get("/board/42/timeline")
    assert response.status_code == 200
    assert response.text == "<main>milestones</main>"


def test_build_static_app_requires_index(tmp_path: Path) -> None:
    assert build_static_app(str(tmp_path)) is None
    assert build_static_app(str(tmp_path / "missing")) is None


def test_build_static_app(spa_dir: Path) -> None:
    assert isinstance(build_static_app(str(spa_dir)), SPAStaticFiles)


# ---------------------------------------------------------------------------
# allow_origin_header
# ---------------------------------------------------------------------------


def test_wildcard_origin() -> None:
    assert allow_origin_header(ServerSettings(), "https://anything.example") == "*"


def test_allowed_request_origin_is_echoed() -> None:
    server = ServerSettings(allowed_origins="https://a.example,https://b.example")
    assert allow_origin_header(server, "https://b.example") == "https://b.example"


def test_unlisted_origin_falls_back_to_first() -> None:
    server = ServerSettings(allowed_origins="https://a.example,https://b.example")
    assert allow_origin_header(server, "https://evil.example") == "https://a.example"
    assert allow_origin_header(server, None) == "https://a.example"
