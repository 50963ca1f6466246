"""Data models for mavenindex."""

from mavenindex.models.listing import (
    Artifact,
    ChildDirectory,
    EntryKind,
    PatchReport,
    WalkEvent,
    WalkStats,
)

__all__ = [
    "Artifact",
    "ChildDirectory",
    "EntryKind",
    "PatchReport",
    "WalkEvent",
    "WalkStats",
]
