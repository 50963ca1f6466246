"""Recursive index generator for an artifact tree."""

import asyncio
import logging
import os
import stat
from pathlib import Path
from typing import Optional

from mavenindex.models import Artifact, ChildDirectory, EntryKind, WalkEvent, WalkStats
from mavenindex.protocols import WalkListener
from mavenindex.render.markdown import documentation_line, join_rel, render_index
from mavenindex.settings import (
    CHANGELOG_FILENAME,
    IGNORED,
    INDEX_FILENAME,
    JAVADOC_ENTRY_PAGE,
    SEARCH_INDEX_FILENAME,
    SiteSettings,
)
from mavenindex.storage import SearchIndex
from mavenindex.unpackers import JavadocUnpacker, is_documentation_archive

logger = logging.getLogger(__name__)


class IndexWriteError(Exception):
    """A directory's index document could not be written."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Cannot write {path}: {cause}")
        self.path = path
        self.cause = cause


def classify(mode: int) -> EntryKind:
    """Map a stat mode to the kind of listing entry."""
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.ARTIFACT
    return EntryKind.UNKNOWN


class TreeWalker:
    """Writes an index document into every non-empty directory under a root.

    Filesystem calls run in worker threads but are awaited one at a time,
    so children are always complete before their parent's page is written.
    """

    def __init__(
        self,
        root: Path | str,
        settings: Optional[SiteSettings] = None,
        unpacker: Optional[JavadocUnpacker] = None,
        listener: Optional[WalkListener] = None,
    ):
        self.root = Path(root).resolve()
        self.settings = settings or SiteSettings()
        self.unpacker = unpacker or JavadocUnpacker(
            head_link=self.settings.javadoc_head_link
        )
        self.listener = listener
        self.stats = WalkStats()

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix() if path != self.root else ""

    def _emit(self, kind: str, rel_path: str, detail: Optional[str] = None) -> None:
        if self.listener is not None:
            self.listener.notify(WalkEvent(kind, rel_path, detail), self.stats)

    def _skip_entry(self, path: Path, error: Exception) -> None:
        logger.warning(f"Skipping {path}: {error}")
        self.stats.entries_skipped += 1
        self._emit("entry_skipped", self.relative(path), str(error))

    async def _classify(self, path: Path) -> tuple[EntryKind, Optional[os.stat_result]]:
        try:
            st = await asyncio.to_thread(path.stat)
        except OSError as e:
            self._skip_entry(path, e)
            return EntryKind.UNKNOWN, None

        kind = classify(st.st_mode)
        if kind is EntryKind.UNKNOWN:
            self._skip_entry(path, ValueError("neither a file nor a directory"))
        return kind, st

    async def _read_changelog(self, path: Path) -> Optional[str]:
        try:
            url = (await asyncio.to_thread(path.read_text, encoding="utf-8")).strip()
        except (OSError, UnicodeDecodeError) as e:
            self._skip_entry(path, e)
            return None
        return url or None

    async def visit(self, directory: Path, index: SearchIndex) -> None:
        """Index ``directory`` and everything below it.

        Args:
            directory: Directory to index (the root or a descendant of it)
            index: Search index for this run; non-root directories are
                recorded in visitation order

        Raises:
            IndexWriteError: an index document could not be written
        """
        rel_dir = self.relative(directory)
        display = "root" if not rel_dir else f"root/{rel_dir}"

        try:
            names = sorted(await asyncio.to_thread(os.listdir, directory))
        except OSError as e:
            if directory == self.root:
                raise
            self._skip_entry(directory, e)
            return

        if not names:
            logger.info(f"Skipping empty directory {display}")
            self.stats.directories_skipped += 1
            self._emit("skipped", rel_dir, "empty")
            return

        directories: list[Path] = []
        artifacts: list[tuple[str, os.stat_result]] = []
        for name in names:
            if name in IGNORED:
                continue

            path = directory / name
            kind, st = await self._classify(path)
            if kind is EntryKind.DIRECTORY:
                directories.append(path)
            elif kind is EntryKind.ARTIFACT:
                artifacts.append((name, st))

        # A javadoc folder from an earlier extraction is rebuilt below, never
        # listed. Any other folder of that name is ordinary content.
        if any(is_documentation_archive(name, self.unpacker.suffix) for name, _ in artifacts):
            target = directory / self.unpacker.target_name
            if target in directories and await asyncio.to_thread(self.unpacker.owns, target):
                directories.remove(target)

        if not directories and not artifacts:
            logger.info(f"Skipping {display}: only ignored entries")
            self.stats.directories_skipped += 1
            self._emit("skipped", rel_dir, "only ignored entries")
            return

        if rel_dir:
            index.record(rel_dir)

        children: list[ChildDirectory] = []
        for path in directories:
            await self.visit(path, index)
            try:
                st = await asyncio.to_thread(path.stat)
            except OSError as e:
                self._skip_entry(path, e)
                continue
            children.append(ChildDirectory(name=path.name, modified=st.st_mtime))

        listed: list[Artifact] = []
        extracted = False
        archive_seen = False
        for name, st in artifacts:
            artifact = Artifact(
                name=name,
                size_bytes=st.st_size,
                modified=st.st_mtime,
                is_documentation_archive=is_documentation_archive(name, self.unpacker.suffix),
            )
            if artifact.is_documentation_archive and not archive_seen:
                archive_seen = True
                extracted = await asyncio.to_thread(self.unpacker.try_extract, directory / name)
                if extracted:
                    self.stats.archives_extracted += 1
                    self.stats.add_report(self.unpacker.reports[-1])
                    self._emit("extracted", join_rel(rel_dir, name))
                else:
                    self.stats.extraction_failures += 1
                    self._emit("extract_failed", join_rel(rel_dir, name))
            listed.append(artifact)

        documentation = None
        if extracted:
            documentation = documentation_line(
                rel_dir, self.unpacker.target_name, JAVADOC_ENTRY_PAGE
            )

        changelog_url = None
        if CHANGELOG_FILENAME in names:
            changelog_url = await self._read_changelog(directory / CHANGELOG_FILENAME)

        markdown = render_index(
            rel_dir,
            children,
            listed,
            layout=self.settings.layout,
            footer_links=self.settings.footer_links,
            documentation=documentation,
            changelog_url=changelog_url,
        )

        target = directory / INDEX_FILENAME
        try:
            await asyncio.to_thread(target.write_text, markdown, encoding="utf-8")
        except OSError as e:
            raise IndexWriteError(target, e) from e

        self.stats.directories_indexed += 1
        self.stats.artifacts_listed += len(listed)
        self._emit("indexed", rel_dir)
        logger.info(f"Created index for {display}")


async def generate(
    root: Path | str,
    settings: Optional[SiteSettings] = None,
    listener: Optional[WalkListener] = None,
) -> WalkStats:
    """Rebuild every index page under ``root`` and its search index.

    Args:
        root: Top of the artifact tree
        settings: Presentation settings (defaults if omitted)
        listener: Optional progress listener

    Returns:
        Counters for the run
    """
    walker = TreeWalker(root, settings=settings, listener=listener)
    index = SearchIndex(walker.root / SEARCH_INDEX_FILENAME)
    await walker.visit(walker.root, index)
    await asyncio.to_thread(index.flush)
    return walker.stats

