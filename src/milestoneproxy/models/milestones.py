from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Upstream (Monday.com) shapes
# ---------------------------------------------------------------------------


class ColumnValue(BaseModel):
    """A single column value as returned by the board query."""

    model_config = ConfigDict(extra="ignore")

    id: str
    text: str | None = None
    value: str | None = None  # Raw JSON-encoded value (e.g. timerange {"from", "to"})


class UpstreamSubitem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str
    column_values: list[ColumnValue] = []


class UpstreamItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str
    column_values: list[ColumnValue] = []
    subitems: list[UpstreamSubitem] | None = None


# ---------------------------------------------------------------------------
# Output schema consumed by the frontend
# ---------------------------------------------------------------------------


class SubItem(BaseModel):
    name: str
    sponsor: str = ""
    lead: str = ""
    timeline: str = ""  # "DD/MM/YYYY – DD/MM/YYYY" or ""
    status: str = ""


class MilestoneItem(BaseModel):
    name: str
    description: str = ""
    date: str = ""  # DD/MM/YYYY or ""
    portfolio: str = ""
    subitems: list[SubItem] = []
