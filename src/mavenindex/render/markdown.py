"""Markdown rendering for directory index pages.

Everything here is pure: callers pass in names, sizes and timestamps that
were already read from the filesystem.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

import yaml

from mavenindex.models import Artifact, ChildDirectory

BREADCRUMB_SEPARATOR = " » "
ROOT_LABEL = "root"


def url_path(rel_path: str) -> str:
    """Site-absolute URL for a root-relative path."""
    return "/" + rel_path.replace("\\", "/").strip("/")


def join_rel(rel_dir: str, name: str) -> str:
    """Join a root-relative directory path and a child name with '/'."""
    return f"{rel_dir}/{name}" if rel_dir else name


def format_size(size_bytes: int) -> str:
    """Size in kilobytes with one decimal place, e.g. ``1.5 KB``."""
    return f"{size_bytes / 1024:.1f} KB"


def format_date(timestamp: float) -> str:
    """UTC calendar date of a POSIX timestamp, ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


def front_matter(layout: str) -> str:
    """YAML front matter selecting the page layout."""
    body = yaml.safe_dump({"layout": layout}, sort_keys=False, allow_unicode=True)
    return f"---\n{body}---\n"


def breadcrumb(rel_path: str) -> str:
    """Trail from the root to ``rel_path``.

    Every segment but the last links to its cumulative prefix; the root
    itself renders as the plain label ``root``.
    """
    segments = [s for s in rel_path.replace("\\", "/").split("/") if s]
    if not segments:
        return ROOT_LABEL

    parts = [f"[{ROOT_LABEL}](/)"]
    current = ""
    for i, segment in enumerate(segments):
        current += "/" + segment
        if i == len(segments) - 1:
            parts.append(segment)
        else:
            parts.append(f"[{segment}]({current})")
    return BREADCRUMB_SEPARATOR.join(parts)


def directory_line(rel_dir: str, child: ChildDirectory) -> str:
    link = url_path(join_rel(rel_dir, child.name))
    return f"- 📁 [{child.name}]({link}) - modified {format_date(child.modified)}"


def artifact_line(rel_dir: str, artifact: Artifact) -> str:
    link = url_path(join_rel(rel_dir, artifact.name))
    return (
        f"- 📄 [{artifact.name}]({link}) - {format_size(artifact.size_bytes)}, "
        f"modified {format_date(artifact.modified)}"
    )


def documentation_line(rel_dir: str, javadoc_dir: str, entry_page: str) -> str:
    link = url_path(join_rel(join_rel(rel_dir, javadoc_dir), entry_page))
    return f"- 📚 [Javadoc]({link})"


def changelog_line(url: str) -> str:
    return f"- 📝 [Changelog]({url})"


def footer(links: Iterable[tuple[str, str]]) -> str:
    lines = ["## Links:"]
    lines.extend(f"- [{label}]({url})" for label, url in links)
    return "\n".join(lines)


def render_index(
    rel_dir: str,
    directories: list[ChildDirectory],
    artifacts: list[Artifact],
    *,
    layout: str,
    footer_links: Iterable[tuple[str, str]],
    documentation: Optional[str] = None,
    changelog_url: Optional[str] = None,
) -> str:
    """Assemble the complete index document for one directory.

    Args:
        rel_dir: Root-relative directory path ("" for the root)
        directories: Child directories, in listing order
        artifacts: Child artifacts, in listing order
        layout: Page layout named in the front matter
        footer_links: (label, url) pairs for the footer block
        documentation: Pre-rendered documentation link line, if any
        changelog_url: Changelog URL, if the directory has one

    Returns:
        Markdown text ending with a newline
    """
    lines = [f"# {breadcrumb(rel_dir)}", ""]
    lines.extend(directory_line(rel_dir, d) for d in directories)
    lines.extend(artifact_line(rel_dir, a) for a in artifacts)
    if documentation:
        lines.append(documentation)
    if changelog_url:
        lines.append(changelog_line(changelog_url))
    lines.append("")
    lines.append(footer(footer_links))

    return front_matter(layout) + "\n".join(lines) + "\n"
