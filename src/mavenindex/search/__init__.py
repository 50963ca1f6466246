"""Client-side search semantics."""

from mavenindex.search.path_filter import (
    EMPTY_QUERY_MESSAGE,
    NO_RESULTS_MESSAGE,
    SearchHit,
    highlight,
    render_results,
    search,
)

__all__ = [
    "EMPTY_QUERY_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "SearchHit",
    "highlight",
    "render_results",
    "search",
]
