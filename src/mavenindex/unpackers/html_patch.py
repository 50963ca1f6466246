"""Header-link injection for extracted documentation pages."""

import logging
import os
from pathlib import Path

from bs4 import BeautifulSoup

from mavenindex.models import PatchReport

logger = logging.getLogger(__name__)


def _line_start(html: str, lineno: int) -> int:
    """Offset of the first character of 1-based line ``lineno``."""
    offset = 0
    for _ in range(lineno - 1):
        offset = html.index("\n", offset) + 1
    return offset


def insert_head_link(html: str, link: str) -> str | None:
    """Return ``html`` with ``link`` right after the opening head tag.

    The head element is located by parsing, so ``<head>`` text inside
    comments or scripts is ignored. The rest of the page is kept byte for
    byte. Returns None when the page has no head tag.
    """
    head = BeautifulSoup(html, "html.parser").head
    if head is None or head.sourceline is None:
        return None

    start = _line_start(html, head.sourceline) + head.sourcepos
    end = html.find(">", start) + 1
    if end == 0:
        return None
    return html[:end] + link + html[end:]


def patch_pages(report: PatchReport, link: str) -> PatchReport:
    """Insert ``link`` into every ``.html`` page under ``report.target``.

    Best effort per page: unreadable or unwritable pages are logged and
    recorded in ``report.failed``, the rest are still processed.
    """
    for dirpath, dirnames, filenames in os.walk(report.target):
        dirnames.sort()
        for filename in sorted(filenames):
            if not filename.endswith(".html"):
                continue
            page = Path(dirpath) / filename
            report.attempted += 1
            try:
                # newline="" keeps the page's own line endings
                with open(page, encoding="utf-8", newline="") as f:
                    html = f.read()
                patched = insert_head_link(html, link)
                if patched is None:
                    report.unchanged += 1
                    continue
                with open(page, "w", encoding="utf-8", newline="") as f:
                    f.write(patched)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not patch {page}: {e}")
                report.failed.append(page)
                continue
            report.patched += 1

    return report
