from __future__ import annotations

from datetime import datetime
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator


class CacheEntry(BaseModel):
    """Extracted text for one document URL."""

    url: str
    text: str
    fetched_at: datetime


class FetchedDocument(BaseModel):
    """Raw bytes of a fetched document with the upstream content type."""

    model_config = ConfigDict(frozen=True)

    url: str
    content: bytes
    content_type: str | None = None


class SearchMatch(BaseModel):
    snippet: str


class DocumentUrlInput(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("url must be an absolute http:// or https:// URL")
        if len(v) > 2048:
            raise ValueError("url must not exceed 2048 characters")
        return v


class PdfSearchInput(DocumentUrlInput):
    q: str
