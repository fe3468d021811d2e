from __future__ import annotations

from milestoneproxy.models.documents import (
    CacheEntry,
    DocumentUrlInput,
    FetchedDocument,
    PdfSearchInput,
    SearchMatch,
)
from milestoneproxy.models.milestones import (
    ColumnValue,
    MilestoneItem,
    SubItem,
    UpstreamItem,
    UpstreamSubitem,
)

__all__ = [
    # upstream
    "ColumnValue",
    "UpstreamItem",
    "UpstreamSubitem",
    # milestones
    "MilestoneItem",
    "SubItem",
    # documents
    "CacheEntry",
    "FetchedDocument",
    "SearchMatch",
    "DocumentUrlInput",
    "PdfSearchInput",
]
