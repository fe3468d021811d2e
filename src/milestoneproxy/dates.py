"""Date formatting for board columns."""

from __future__ import annotations

import re

# Date column text is "YYYY-MM-DD", optionally followed by a time ("2024-03-07 10:00").
_ISO_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})(?:$|[\sT])")


def format_date(iso: str | None) -> str:
    """Convert ``YYYY-MM-DD`` to ``DD/MM/YYYY``.

    Returns an empty string for missing or malformed input.
    """
    if not iso:
        return ""
    match = _ISO_DATE_RE.match(iso)
    if match is None:
        return ""
    year, month, day = match.groups()
    return f"{day}/{month}/{year}"
