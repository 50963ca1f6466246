"""FastMCP server over a generated artifact tree."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from mavenindex.render.markdown import url_path
from mavenindex.search import EMPTY_QUERY_MESSAGE, NO_RESULTS_MESSAGE
from mavenindex.search import search as search_entries
from mavenindex.settings import INDEX_FILENAME, SEARCH_INDEX_FILENAME
from mavenindex.storage import SearchIndex


def read_index_page(root: Path, path: str) -> str:
    """Return the index document of a directory under ``root``.

    Paths that escape the root or have no index document produce an error
    string instead of an exception, since the result goes to an MCP client.
    """
    root = root.resolve()
    directory = (root / path.strip("/")).resolve()
    if directory != root and root not in directory.parents:
        return f"Error: {path} is outside the repository"

    page = directory / INDEX_FILENAME
    if not page.is_file():
        return f"Error: No index for '{path}'"
    return page.read_text(encoding="utf-8")


def format_hits(entries: list[str], query: str, prefix: str = "") -> str:
    """Plain-text search results, one site URL per line."""
    if not query:
        return EMPTY_QUERY_MESSAGE
    hits = search_entries(entries, query, prefix)
    if not hits:
        return NO_RESULTS_MESSAGE
    return "\n".join(url_path(hit.path) for hit in hits)


def create_mcp_server(root: Path) -> FastMCP:
    """Create an MCP server for one generated repository tree.

    Args:
        root: Root the index pages and search index were generated into

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="mavenindex",
    )

    # Loaded once per server; regenerate and restart to pick up changes
    entries = SearchIndex.load(root / SEARCH_INDEX_FILENAME)

    @mcp.tool()
    def search(query: str, prefix: str = "") -> str:
        """Search the repository's directories by substring.

        Args:
            query: Case-insensitive text to look for in directory paths
            prefix: Optional path prefix (e.g. "com/acme") to narrow results

        Returns:
            Matching directory URLs, one per line
        """
        return format_hits(entries, query, prefix)

    @mcp.tool()
    def ls(path: str = "") -> str:
        """Show the index page of a directory.

        Args:
            path: Directory path relative to the repository root ("" for the root)

        Returns:
            The directory's Markdown index with its artifacts, sizes and dates
        """
        return read_index_page(root, path)

    return mcp
