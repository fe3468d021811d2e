"""Projection of board items into the milestone schema.

Each output field is bound to a board column identifier through
ColumnSettings. A column that is missing on an item, or a value that cannot
be parsed, becomes an empty string; only an upstream payload whose overall
shape does not validate is an error.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from milestoneproxy.dates import format_date
from milestoneproxy.errors import ErrorCode, MilestoneProxyError
from milestoneproxy.models.milestones import (
    ColumnValue,
    MilestoneItem,
    SubItem,
    UpstreamItem,
    UpstreamSubitem,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from milestoneproxy.config import ColumnSettings

log = structlog.get_logger()

TIMELINE_SEPARATOR = " – "


def column_index(columns: Iterable[ColumnValue]) -> dict[str, ColumnValue]:
    """Index column values by identifier. The first occurrence wins."""
    index: dict[str, ColumnValue] = {}
    for column in columns:
        index.setdefault(column.id, column)
    return index


def column_text(index: dict[str, ColumnValue], column_id: str) -> str:
    column = index.get(column_id)
    if column is None or column.text is None:
        return ""
    return column.text


def parse_timeline(raw_value: str | None) -> str:
    """Format a timerange column value ``{"from": ..., "to": ...}``.

    Both bounds must format; otherwise the timeline is empty.
    """
    if not raw_value:
        return ""
    try:
        value = json.loads(raw_value)
    except ValueError:
        return ""
    if not isinstance(value, dict):
        return ""

    start = format_date(value.get("from") if isinstance(value.get("from"), str) else None)
    end = format_date(value.get("to") if isinstance(value.get("to"), str) else None)
    if not start or not end:
        return ""
    return f"{start}{TIMELINE_SEPARATOR}{end}"


def project_subitem(subitem: UpstreamSubitem, columns: ColumnSettings) -> SubItem:
    index = column_index(subitem.column_values)
    timeline_column = index.get(columns.timeline)
    return SubItem(
        name=subitem.name,
        sponsor=column_text(index, columns.sponsor),
        lead=column_text(index, columns.lead),
        timeline=parse_timeline(timeline_column.value if timeline_column else None),
        status=column_text(index, columns.status),
    )


def project_item(item: UpstreamItem, columns: ColumnSettings) -> MilestoneItem:
    index = column_index(item.column_values)
    return MilestoneItem(
        name=item.name,
        description=column_text(index, columns.description),
        date=format_date(column_text(index, columns.date)),
        portfolio=column_text(index, columns.portfolio),
        subitems=[project_subitem(sub, columns) for sub in item.subitems or []],
    )


def _raw_items(payload: dict) -> list:
    data = payload.get("data") or {}
    boards = data.get("boards") or []
    if not boards:
        return []
    items_page = boards[0].get("items_page") or {}
    return items_page.get("items") or []


def project_milestones(payload: dict, columns: ColumnSettings) -> list[MilestoneItem]:
    """Project a board query response into milestone items.

    Raises MilestoneProxyError(UPSTREAM_ERROR) if the response does not have
    the expected structure. Projection is all-or-nothing.
    """
    try:
        items = [UpstreamItem.model_validate(raw) for raw in _raw_items(payload)]
    except (ValidationError, AttributeError, TypeError) as exc:
        log.error("upstream_payload_invalid", error=str(exc))
        raise MilestoneProxyError(
            code=ErrorCode.UPSTREAM_ERROR,
            message="Failed to load milestones",
            suggestion="The board returned data in an unexpected shape.",
            recoverable=False,
        ) from exc

    return [project_item(item, columns) for item in items]
