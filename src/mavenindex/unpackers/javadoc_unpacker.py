"""Unpacker for javadoc archives published beside artifacts."""

import logging
import shutil
import zipfile
import zlib
from pathlib import Path

from mavenindex.models import PatchReport
from mavenindex.settings import (
    DEFAULT_JAVADOC_HEAD_LINK,
    JAVADOC_DIRNAME,
    JAVADOC_MARKER,
    JAVADOC_SUFFIX,
)
from mavenindex.unpackers.html_patch import patch_pages

logger = logging.getLogger(__name__)

# Everything zipfile raises for a readable but unusable archive: bad
# structure, corrupt deflate data, encrypted entries, unknown methods.
ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    RuntimeError,
    NotImplementedError,
    EOFError,
    OSError,
)


class ExtractionTargetError(Exception):
    """The javadoc target is taken by something this tool did not create."""


def is_documentation_archive(name: str, suffix: str = JAVADOC_SUFFIX) -> bool:
    """Check if a file name marks a documentation archive."""
    return name.endswith(suffix)


class JavadocUnpacker:
    """Extracts ``*-javadoc.jar`` archives into a sibling ``javadoc/`` folder.

    Folders it creates carry a marker file; an existing ``javadoc/`` without
    the marker belongs to someone else and is never touched.
    """

    def __init__(
        self,
        head_link: str = DEFAULT_JAVADOC_HEAD_LINK,
        suffix: str = JAVADOC_SUFFIX,
        target_name: str = JAVADOC_DIRNAME,
    ):
        self.head_link = head_link
        self.suffix = suffix
        self.target_name = target_name
        self.reports: list[PatchReport] = []

    def can_handle(self, archive: Path) -> bool:
        """Check if this is a documentation archive."""
        return is_documentation_archive(archive.name, self.suffix)

    def target_for(self, archive: Path) -> Path:
        return archive.parent / self.target_name

    @staticmethod
    def owns(target: Path) -> bool:
        """Check if ``target`` is a folder a previous extraction created."""
        return (target / JAVADOC_MARKER).is_file()

    def _claim(self, target: Path, archive: Path) -> None:
        if target.exists() and not target.is_dir():
            raise ExtractionTargetError(
                f"{target} exists and is not a directory; refusing to extract {archive.name}"
            )
        if target.is_dir() and not self.owns(target) and any(target.iterdir()):
            raise ExtractionTargetError(
                f"{target} is an existing directory not created by mavenindex; "
                f"refusing to extract {archive.name}"
            )

    def extract(self, archive: Path) -> PatchReport:
        """Extract ``archive`` and patch its pages.

        Args:
            archive: Path to the documentation archive

        Returns:
            Tally of the page patching step

        Raises:
            ExtractionTargetError: the target name is taken
            zipfile.BadZipFile: the archive is corrupt
            OSError: the archive or target cannot be read or written
        """
        target = self.target_for(archive)
        self._claim(target, archive)

        with zipfile.ZipFile(archive, "r") as zf:
            # Clear stale pages but keep the folder, so the parent mtime holds.
            if target.is_dir():
                for child in target.iterdir():
                    if child.is_dir() and not child.is_symlink():
                        shutil.rmtree(child)
                    else:
                        child.unlink()
            target.mkdir(parents=True, exist_ok=True)
            (target / JAVADOC_MARKER).write_text(f"{archive.name}\n", encoding="utf-8")
            zf.extractall(target)

        report = patch_pages(PatchReport(archive=archive, target=target), self.head_link)
        self.reports.append(report)
        return report

    def try_extract(self, archive: Path) -> bool:
        """Extract ``archive`` if it is a documentation archive.

        Returns:
            True iff the archive was recognized and extracted. Page patch
            failures do not change the result; see ``reports``.
        """
        if not self.can_handle(archive):
            return False

        try:
            report = self.extract(archive)
        except ExtractionTargetError as e:
            logger.error(f"Failed to extract {archive}: {e}")
            return False
        except ARCHIVE_ERRORS as e:
            logger.error(f"Failed to extract {archive}: {type(e).__name__}: {e}")
            return False

        logger.info(
            f"Extracted {archive.name} -> {report.target.name}/ "
            f"({report.patched}/{report.attempted} pages patched)"
        )
        if report.failed:
            logger.warning(f"  {len(report.failed)} pages could not be patched")
        return True
