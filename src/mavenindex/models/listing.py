"""Core data models for directory listings and walk progress."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class EntryKind(str, Enum):
    """Filesystem type of a directory child."""

    DIRECTORY = "directory"
    ARTIFACT = "artifact"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Artifact:
    """A leaf file listed in a directory index."""

    name: str
    size_bytes: int
    modified: float
    is_documentation_archive: bool = False


@dataclass(frozen=True)
class ChildDirectory:
    """A subdirectory listed in a directory index."""

    name: str
    modified: float


@dataclass
class PatchReport:
    """Outcome of patching the HTML pages of one extracted archive."""

    archive: Path
    target: Path
    attempted: int = 0
    patched: int = 0
    unchanged: int = 0
    failed: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class WalkStats:
    """Counters tracked during one generator run."""

    directories_indexed: int = 0
    directories_skipped: int = 0
    artifacts_listed: int = 0
    entries_skipped: int = 0
    archives_extracted: int = 0
    extraction_failures: int = 0
    pages_patched: int = 0
    page_failures: int = 0

    def add_report(self, report: PatchReport) -> None:
        self.pages_patched += report.patched
        self.page_failures += len(report.failed)


@dataclass(frozen=True)
class WalkEvent:
    """Progress notification emitted by the tree walker.

    ``kind`` is one of ``indexed``, ``skipped``, ``extracted``,
    ``extract_failed`` or ``entry_skipped``. ``path`` is root-relative.
    """

    kind: str
    path: str
    detail: Optional[str] = None
