"""Monday.com GraphQL client.

One POST per query, authorised with the account API key. All failure modes
(missing configuration, transport errors, non-2xx responses, GraphQL error
lists) surface as MilestoneProxyError so the route layer can map them.
Upstream detail is logged here and kept out of client-facing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from milestoneproxy.errors import ErrorCode, MilestoneProxyError

if TYPE_CHECKING:
    from milestoneproxy.config import MondaySettings

log = structlog.get_logger()

MILESTONES_QUERY = """
query ($boardIds: [ID!], $limit: Int!) {
  boards(ids: $boardIds) {
    items_page(limit: $limit) {
      items {
        id
        name
        column_values {
          id
          text
        }
        subitems {
          id
          name
          column_values {
            id
            text
            value
          }
        }
      }
    }
  }
}
"""


def _upstream_error() -> MilestoneProxyError:
    return MilestoneProxyError(
        code=ErrorCode.UPSTREAM_ERROR,
        message="Failed to load milestones",
        suggestion="Monday.com may be unavailable; try again shortly.",
        recoverable=True,
    )


class MondayClient:
    """Thin GraphQL client implementing UpstreamProtocol."""

    def __init__(self, client: httpx.AsyncClient, settings: MondaySettings) -> None:
        self._client = client
        self._settings = settings

    def _require_config(self) -> None:
        if not self._settings.configured:
            raise MilestoneProxyError(
                code=ErrorCode.NOT_CONFIGURED,
                message="Milestone board is not configured.",
                suggestion=(
                    "Set MILESTONEPROXY__MONDAY__API_KEY and MILESTONEPROXY__MONDAY__BOARD_ID."
                ),
                recoverable=False,
            )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": self._settings.api_key or "",
            "Content-Type": "application/json",
        }
        if self._settings.api_version:
            headers["API-Version"] = self._settings.api_version
        return headers

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> dict:
        """Run a GraphQL query and return the decoded response body."""
        self._require_config()

        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        try:
            response = await self._client.post(
                self._settings.api_url, json=body, headers=self._headers()
            )
        except httpx.HTTPError as exc:
            log.error("upstream_network_error", error=str(exc))
            raise _upstream_error() from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success or not isinstance(payload, dict):
            log.error(
                "upstream_error",
                status_code=response.status_code,
                reason=response.reason_phrase,
                detail=_error_messages(payload) or None,
            )
            raise _upstream_error()

        if payload.get("errors"):
            log.error(
                "upstream_error",
                status_code=response.status_code,
                detail=_error_messages(payload),
            )
            raise _upstream_error()

        return payload

    async def fetch_milestones(self) -> dict:
        """Fetch items and subitems of the configured board."""
        return await self.query(
            MILESTONES_QUERY,
            {
                "boardIds": [self._settings.board_id],
                "limit": self._settings.items_limit,
            },
        )


def _error_messages(payload: object) -> str:
    if not isinstance(payload, dict):
        return ""
    errors = payload.get("errors") or []
    if not isinstance(errors, list):
        return str(errors)
    return " | ".join(
        str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
    )
