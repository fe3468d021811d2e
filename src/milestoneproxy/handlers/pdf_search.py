"""Handler for GET /api/pdf-search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from milestoneproxy.errors import ErrorCode, MilestoneProxyError
from milestoneproxy.models.documents import PdfSearchInput
from milestoneproxy.search import search_text

if TYPE_CHECKING:
    from milestoneproxy.state import AppState


async def handle(url: str | None, q: str | None, state: AppState) -> dict:
    """Search the document at ``url`` for ``q`` and return snippet matches."""
    log = structlog.get_logger().bind(handler="pdf_search", url=url)
    log.info("handler_called")

    if not url or q is None or q == "":
        raise MilestoneProxyError(
            code=ErrorCode.INVALID_INPUT,
            message="Missing ?url or ?q",
            suggestion="Provide both the document URL and a search query.",
        )

    try:
        validated = PdfSearchInput(url=url, q=q)
    except ValidationError as exc:
        raise MilestoneProxyError(
            code=ErrorCode.INVALID_INPUT,
            message="Invalid ?url",
            suggestion="Provide an absolute http(s) URL of at most 2048 characters.",
        ) from exc

    if state.document_cache is None:
        raise RuntimeError("Document cache not initialized")

    # Skip the download entirely for queries that cannot match.
    if not validated.q.strip():
        return {"success": True, "matches": []}

    text = await state.document_cache.get_text(validated.url)
    matches = search_text(
        text,
        validated.q,
        max_matches=state.settings.documents.max_matches,
        context_chars=state.settings.documents.snippet_context,
    )

    log.info("search_complete", matches=len(matches))
    return {
        "success": True,
        "matches": [m.model_dump() for m in matches],
    }
