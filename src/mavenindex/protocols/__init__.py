"""Protocol definitions for extensible components."""

from mavenindex.protocols.listener import WalkListener

__all__ = ["WalkListener"]
