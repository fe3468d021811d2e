"""Handler for GET /api/milestones.

Fetches the configured board and projects it into the milestone schema.
No Starlette imports; server.py handles the HTTP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from milestoneproxy.projector import project_milestones

if TYPE_CHECKING:
    from milestoneproxy.state import AppState


async def handle(state: AppState) -> dict:
    """Return ``{"success": True, "items": [...]}`` for the configured board."""
    log = structlog.get_logger().bind(handler="milestones")
    log.info("handler_called")

    if state.monday is None:
        raise RuntimeError("Monday client not initialized")

    payload = await state.monday.fetch_milestones()
    items = project_milestones(payload, state.settings.monday.columns)

    log.info(
        "milestones_projected",
        items=len(items),
        subitems=sum(len(item.subitems) for item in items),
    )
    return {
        "success": True,
        "items": [item.model_dump(mode="json") for item in items],
    }
