"""Handler for GET /api/pdf-proxy.

Downloads the document and hands its bytes back to the route layer, which
attaches caching and CORS headers so the browser can read the PDF directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from milestoneproxy.errors import ErrorCode, MilestoneProxyError
from milestoneproxy.models.documents import DocumentUrlInput

if TYPE_CHECKING:
    from milestoneproxy.models.documents import FetchedDocument
    from milestoneproxy.state import AppState

DEFAULT_CONTENT_TYPE = "application/pdf"


async def handle(url: str | None, state: AppState) -> FetchedDocument:
    log = structlog.get_logger().bind(handler="pdf_proxy", url=url)
    log.info("handler_called")

    if not url:
        raise MilestoneProxyError(
            code=ErrorCode.INVALID_INPUT,
            message="Missing ?url",
            suggestion="Pass the encoded document URL as ?url=.",
        )

    try:
        validated = DocumentUrlInput(url=url)
    except ValidationError as exc:
        raise MilestoneProxyError(
            code=ErrorCode.INVALID_INPUT,
            message="Invalid ?url",
            suggestion="Provide an absolute http(s) URL of at most 2048 characters.",
        ) from exc

    if state.fetcher is None:
        raise RuntimeError("Document fetcher not initialized")

    document = await state.fetcher.fetch(validated.url)
    if not document.content_type:
        document = document.model_copy(update={"content_type": DEFAULT_CONTENT_TYPE})
    return document
