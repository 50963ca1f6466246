"""Search-box semantics for the generated search index.

Mirrors what the site's search control does in the browser: entries are
narrowed to the current page's subtree, matched case-insensitively, and the
first match is emphasised.
"""

import html
import re
from dataclasses import dataclass

EMPTY_QUERY_MESSAGE = "Start searching to get results!"
NO_RESULTS_MESSAGE = "No results! Try searching for something else."
DEBOUNCE_SECONDS = 0.15


@dataclass(frozen=True)
class SearchHit:
    """One matching index entry."""

    path: str
    highlighted: str

    @property
    def href(self) -> str:
        return "/" + self.path


def highlight(path: str, query: str) -> str:
    """HTML-escape ``path`` and wrap the first match of ``query`` in <strong>."""
    match = re.search(re.escape(query), path, re.IGNORECASE) if query else None
    if match is None:
        return html.escape(path, quote=False)
    start, end = match.span()
    return (
        html.escape(path[:start], quote=False)
        + "<strong>"
        + html.escape(path[start:end], quote=False)
        + "</strong>"
        + html.escape(path[end:], quote=False)
    )


def search(entries: list[str], query: str, current: str = "") -> list[SearchHit]:
    """Filter index entries for a query issued from page path ``current``.

    Args:
        entries: Search index entries, in index order
        query: Text typed into the search box
        current: Path of the page the search runs on ("" for the root)

    Returns:
        Matching entries in index order; empty for an empty query
    """
    if not query:
        return []

    needle = query.lower()
    prefix = current.strip("/").lower()
    return [
        SearchHit(path=entry, highlighted=highlight(entry, query))
        for entry in entries
        if entry.lower().startswith(prefix) and needle in entry.lower()
    ]


def render_results(hits: list[SearchHit], query: str) -> list[str]:
    """List items the search control shows for a query."""
    if not query:
        return [EMPTY_QUERY_MESSAGE]
    if not hits:
        return [NO_RESULTS_MESSAGE]
    return [f'<a href="{html.escape(h.href)}">{h.highlighted}</a>' for h in hits]
