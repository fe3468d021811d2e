"""In-memory document text cache with a fixed freshness window.

Maps a document URL to the plain text extracted from it. A lookup that finds
no entry, or an entry older than the TTL, fetches and extracts again before
answering. A failed refresh raises to the caller and leaves the old entry in
place; stale text is never returned in place of the error.

The map is bounded: once ``max_entries`` URLs are held, the least recently
used entry is evicted. All map access happens on the event loop thread;
only the PDF extraction runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog
from cachetools import Cache, LRUCache

from milestoneproxy.extractor import extract_pdf_text
from milestoneproxy.models.documents import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from milestoneproxy.protocols import FetcherProtocol

log = structlog.get_logger()

DEFAULT_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DocumentCache:
    """Bounded TTL cache of extracted document text, implementing TextCacheProtocol."""

    def __init__(
        self,
        fetcher: FetcherProtocol,
        *,
        ttl: timedelta = DEFAULT_TTL,
        max_entries: int = 64,
        extractor: Callable[[bytes], str] = extract_pdf_text,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl
        self._extractor = extractor
        self._clock = clock
        self._entries: LRUCache[str, CacheEntry] = LRUCache(maxsize=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def peek(self, url: str) -> CacheEntry | None:
        """Return the entry for ``url`` regardless of age.

        Neither refetches nor counts as a use for LRU ordering.
        """
        if url not in self._entries:
            return None
        # LRUCache.__getitem__ would mark the key as recently used.
        return Cache.__getitem__(self._entries, url)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at <= self._ttl

    async def get_text(self, url: str) -> str:
        """Return extracted text for ``url``, fetching on miss or staleness.

        Raises MilestoneProxyError with UPSTREAM_UNAVAILABLE if the fetch
        fails, or EXTRACTION_FAILED if the payload is not a readable PDF.
        """
        entry = self._entries.get(url)
        if entry is not None and self.is_fresh(entry):
            log.debug("cache_hit", url=url)
            return entry.text

        log.info("cache_miss_fetching", url=url, stale=entry is not None)

        # Concurrent misses for the same URL each fetch; the last write wins.
        document = await self._fetcher.fetch(url)
        text = await asyncio.to_thread(self._extractor, document.content)

        self._entries[url] = CacheEntry(url=url, text=text, fetched_at=self._clock())
        log.info("cache_stored", url=url, text_length=len(text), entries=len(self._entries))
        return text
