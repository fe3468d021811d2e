"""PDF text extraction."""

from __future__ import annotations

import io

import structlog
from pypdf import PdfReader

from milestoneproxy.errors import ErrorCode, MilestoneProxyError

log = structlog.get_logger()


def extract_pdf_text(data: bytes) -> str:
    """Extract plain text from PDF bytes, one page per line block.

    Blocking; callers on the event loop run it via ``asyncio.to_thread``.
    Raises MilestoneProxyError(EXTRACTION_FAILED) if the bytes are not a
    readable PDF.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:
        # pypdf raises arbitrary exception types on malformed structure.
        log.warning("pdf_extraction_failed", size=len(data), exc_info=True)
        raise MilestoneProxyError(
            code=ErrorCode.EXTRACTION_FAILED,
            message="Document could not be read as a PDF.",
            suggestion="Check that the URL points directly at a PDF file.",
            recoverable=False,
        ) from exc

    return "\n".join(pages)
