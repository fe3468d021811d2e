"""Protocol interfaces for swappable components.

Handlers and AppState reference these protocols, not the concrete
implementations, so tests can use lightweight in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from milestoneproxy.models.documents import FetchedDocument


class FetcherProtocol(Protocol):
    """Interface for the HTTP document fetcher."""

    async def fetch(self, url: str) -> FetchedDocument: ...


class TextCacheProtocol(Protocol):
    """Interface for the URL -> extracted text cache."""

    async def get_text(self, url: str) -> str: ...


class UpstreamProtocol(Protocol):
    """Interface for the board API client."""

    async def fetch_milestones(self) -> dict: ...
