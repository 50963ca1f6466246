"""Protocol for walk progress listeners."""

from typing import Protocol, runtime_checkable

from mavenindex.models import WalkEvent, WalkStats


@runtime_checkable
class WalkListener(Protocol):
    """Receives progress from a running tree walk.

    Uses structural subtyping - the TUI and tests implement it without
    inheritance. Called on the walker's event loop, between filesystem steps.
    """

    def notify(self, event: WalkEvent, stats: WalkStats) -> None:
        """Handle one walk event along with the running counters."""
        ...
