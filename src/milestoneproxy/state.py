"""Application state container.

AppState is created once at startup (inside the Starlette lifespan) and
stored on ``app.state.app_state``. Route functions pass it to the handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from milestoneproxy.config import Settings
    from milestoneproxy.protocols import (
        FetcherProtocol,
        TextCacheProtocol,
        UpstreamProtocol,
    )


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every handler."""

    settings: Settings

    # Milestones path
    monday: UpstreamProtocol | None = None
    monday_http_client: httpx.AsyncClient | None = None

    # Document path
    fetcher: FetcherProtocol | None = None
    document_cache: TextCacheProtocol | None = None
    document_http_client: httpx.AsyncClient | None = None
