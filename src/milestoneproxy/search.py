"""Snippet search over extracted document text.

Literal, case-insensitive, non-overlapping matching. Each hit yields the
surrounding context with whitespace runs collapsed, so PDF line breaks do not
leak into the snippet.
"""

from __future__ import annotations

import re
from itertools import islice

from milestoneproxy.models.documents import SearchMatch

MAX_MATCHES = 8
CONTEXT_CHARS = 90

_WHITESPACE_RE = re.compile(r"\s+")


def search_text(
    text: str,
    query: str,
    *,
    max_matches: int = MAX_MATCHES,
    context_chars: int = CONTEXT_CHARS,
) -> list[SearchMatch]:
    """Return up to ``max_matches`` snippets around occurrences of ``query``.

    An empty or whitespace-only query returns no matches.
    """
    needle = query.strip()
    if not needle or len(needle) > len(text):
        return []

    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    matches: list[SearchMatch] = []
    for hit in islice(pattern.finditer(text), max_matches):
        start = max(0, hit.start() - context_chars)
        end = min(len(text), hit.end() + context_chars)
        snippet = _WHITESPACE_RE.sub(" ", text[start:end]).strip()
        matches.append(SearchMatch(snippet=snippet))
    return matches
