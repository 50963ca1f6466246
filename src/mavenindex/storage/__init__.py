"""Search index storage."""

from mavenindex.storage.search_index import SearchIndex

__all__ = ["SearchIndex"]
