"""CLI entry point for mavenindex."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from mavenindex.search import render_results, search as search_entries
from mavenindex.settings import (
    INDEX_FILENAME,
    JAVADOC_DIRNAME,
    SEARCH_INDEX_FILENAME,
    SettingsError,
    SiteSettings,
    load_settings,
)
from mavenindex.storage import SearchIndex
from mavenindex.walker import IndexWriteError, generate as generate_tree

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def _require_dir(root: str) -> Path:
    root_path = Path(root)
    if not root_path.is_dir():
        logger.error(f"Not a directory: {root}")
        sys.exit(1)
    return root_path


def _settings(config: Optional[str], layout: Optional[str]) -> SiteSettings:
    try:
        return load_settings(config, layout=layout)
    except SettingsError as e:
        logger.error(str(e))
        sys.exit(1)


def generate(root: str, config: Optional[str] = None, layout: Optional[str] = None) -> None:
    """Rebuild every index page and the search index under a root.

    Args:
        root: Path to the repository root
        config: Optional YAML settings file
        layout: Page layout override
    """
    root_path = _require_dir(root)
    settings = _settings(config, layout)

    logger.info(f"Indexing {root_path.resolve()}")
    try:
        stats = asyncio.run(generate_tree(root_path, settings=settings))
    except (IndexWriteError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"")
    logger.info(
        f"Indexed {stats.directories_indexed} directories, "
        f"{stats.artifacts_listed} artifacts, "
        f"{stats.archives_extracted} javadoc archives"
    )
    if stats.entries_skipped or stats.extraction_failures or stats.page_failures:
        logger.warning(
            f"Skipped {stats.entries_skipped} entries, "
            f"{stats.extraction_failures} failed extractions, "
            f"{stats.page_failures} unpatched pages"
        )


def _load_entries(root: Path) -> list[str]:
    index_path = root / SEARCH_INDEX_FILENAME
    try:
        return SearchIndex.load(index_path)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read search index {index_path}: {e}")
        logger.error("Run 'mavenindex generate' first")
        sys.exit(1)


def search(root: str, query: str, current: str = "") -> None:
    """Query a generated search index the way the site's search box does.

    Args:
        root: Path to the repository root
        query: Search text
        current: Page path the search is issued from
    """
    entries = _load_entries(_require_dir(root))
    hits = search_entries(entries, query, current)
    for line in render_results(hits, query):
        print(line)


def info(root: str) -> None:
    """Show what a previous run generated under a root.

    Args:
        root: Path to the repository root
    """
    root_path = _require_dir(root)
    entries = _load_entries(root_path)
    pages = sum(1 for _ in root_path.rglob(INDEX_FILENAME))
    javadocs = sum(1 for p in root_path.rglob(JAVADOC_DIRNAME) if p.is_dir())

    print(f"Repository: {root_path.resolve()}")
    print(f"")
    print(f"Contents:")
    print(f"  Search entries: {len(entries)}")
    print(f"  Index pages: {pages}")
    print(f"  Javadoc trees: {javadocs}")


def serve(root: str, transport: str = "stdio") -> None:
    """Start MCP server for a generated repository.

    Args:
        root: Path to the repository root
        transport: Transport protocol (stdio or sse)
    """
    root_path = _require_dir(root)
    if not (root_path / SEARCH_INDEX_FILENAME).exists():
        logger.error(f"No {SEARCH_INDEX_FILENAME} in {root}; run 'mavenindex generate' first")
        sys.exit(1)

    # Import here to avoid loading MCP unless needed
    from mavenindex.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving {root} via {transport}")
    mcp = create_mcp_server(root_path)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def deck(root: Optional[str] = None) -> None:
    """Launch the Flight Deck TUI for interactive runs."""
    from mavenindex.flight_deck import main as flight_deck_main

    flight_deck_main(root)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mavenindex",
        description="mavenindex - browsable indexes for Maven-style artifact trees",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Write index.md pages and search-index.json under a root",
    )
    generate_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: current directory)",
    )
    generate_parser.add_argument(
        "-c",
        "--config",
        help="YAML settings file (layout, footer_links, javadoc_head_link)",
    )
    generate_parser.add_argument(
        "--layout",
        help="Page layout named in the front matter (default: default)",
    )

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Query a generated search index",
    )
    search_parser.add_argument("query", help="Text to search for")
    search_parser.add_argument(
        "-r",
        "--root",
        default=".",
        help="Repository root (default: current directory)",
    )
    search_parser.add_argument(
        "--from",
        dest="current",
        default="",
        help="Page path the search is issued from (default: root)",
    )

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about a generated repository",
    )
    info_parser.add_argument("root", nargs="?", default=".", help="Repository root")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for a generated repository",
    )
    serve_parser.add_argument("root", nargs="?", default=".", help="Repository root")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    # deck command
    deck_parser = subparsers.add_parser(
        "deck",
        help="Launch Flight Deck TUI for interactive runs",
    )
    deck_parser.add_argument("root", nargs="?", help="Repository root to preselect")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "generate":
        generate(args.root, args.config, args.layout)
    elif args.command == "search":
        search(args.root, args.query, args.current)
    elif args.command == "info":
        info(args.root)
    elif args.command == "serve":
        serve(args.root, args.transport)
    elif args.command == "deck":
        deck(args.root)


if __name__ == "__main__":
    main()
