"""Fixed names and per-site settings for index generation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

INDEX_FILENAME = "index.md"
SEARCH_INDEX_FILENAME = "search-index.json"
CHANGELOG_FILENAME = "changelog"
JAVADOC_SUFFIX = "-javadoc.jar"
JAVADOC_DIRNAME = "javadoc"
JAVADOC_ENTRY_PAGE = "index.html"
JAVADOC_MARKER = ".mavenindex"

# Never listed, never traversed. Not configurable.
IGNORED = frozenset(
    {
        ".git",
        ".github",
        "_config.yml",
        "_layouts",
        "_includes",
        "CNAME",
        "README.md",
        "404.html",
        "404.md",
        INDEX_FILENAME,
        SEARCH_INDEX_FILENAME,
        CHANGELOG_FILENAME,
        "scripts",
        "package.json",
        "package-lock.json",
        "node_modules",
        JAVADOC_MARKER,
    }
)

DEFAULT_LAYOUT = "default"
DEFAULT_FOOTER_LINKS = (
    ("Github", "https://github.com/SCsupercraft/scsupercraft-maven"),
)
DEFAULT_JAVADOC_HEAD_LINK = '<link rel="icon" type="image/x-icon" href="/favicon.ico">'


class SettingsError(ValueError):
    """Raised when a settings file cannot be used."""


@dataclass(frozen=True)
class SiteSettings:
    """Presentation settings for one generated site."""

    layout: str = DEFAULT_LAYOUT
    footer_links: tuple[tuple[str, str], ...] = field(
        default_factory=lambda: DEFAULT_FOOTER_LINKS
    )
    javadoc_head_link: str = DEFAULT_JAVADOC_HEAD_LINK


def load_settings(path: Optional[Path | str] = None, **overrides: str) -> SiteSettings:
    """Build settings from an optional YAML file plus CLI overrides.

    The file may define ``layout``, ``javadoc_head_link`` and
    ``footer_links`` (a list of ``{label, url}`` mappings). Overrides with a
    value of None are ignored.
    """
    values: dict = {}
    if path is not None:
        try:
            raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Cannot read settings {path}: {e}") from e
        if not isinstance(raw, dict):
            raise SettingsError(f"Settings {path} must be a mapping")
        values.update(_parse_settings(raw))

    values.update({k: v for k, v in overrides.items() if v is not None})
    return SiteSettings(**values)


def _parse_settings(raw: dict) -> dict:
    known = {"layout", "footer_links", "javadoc_head_link"}
    unknown = set(raw) - known
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")

    values = {}
    if "layout" in raw:
        values["layout"] = str(raw["layout"])
    if "javadoc_head_link" in raw:
        values["javadoc_head_link"] = str(raw["javadoc_head_link"])
    if "footer_links" in raw:
        links = []
        for item in raw["footer_links"] or []:
            if not isinstance(item, dict) or "label" not in item or "url" not in item:
                raise SettingsError("footer_links entries need 'label' and 'url'")
            links.append((str(item["label"]), str(item["url"])))
        values["footer_links"] = tuple(links)
    return values
