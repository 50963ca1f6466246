"""Flight Deck - a TUI for running and watching index generation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Log,
    Rule,
    Static,
)

from mavenindex.models import WalkEvent, WalkStats
from mavenindex.settings import SEARCH_INDEX_FILENAME
from mavenindex.walker import IndexWriteError, generate


@dataclass
class RunStatus:
    """Walk counters plus run bookkeeping for the stats panel."""

    stats: WalkStats = field(default_factory=WalkStats)
    current: str = ""
    status: str = "idle"
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed(self) -> str:
        if not self.start_time:
            return "00:00"
        end = self.end_time or datetime.now()
        minutes, seconds = divmod(int((end - self.start_time).total_seconds()), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def copy(self) -> "RunStatus":
        return replace(self, stats=replace(self.stats))


class StatsPanel(Static):
    """Real-time statistics display."""

    def compose(self) -> ComposeResult:
        yield Static(id="stats-content")

    def on_mount(self) -> None:
        self.update_display(RunStatus())

    def update_display(self, run: RunStatus) -> None:
        content = self.query_one("#stats-content", Static)
        stats = run.stats
        status_color = {
            "idle": "dim",
            "running": "green",
            "complete": "cyan",
            "error": "red",
        }.get(run.status, "white")

        content.update(f"""[b]STATUS[/b]  [{status_color}]{run.status.upper()}[/]

[b]TIME[/b]    {run.elapsed}

[b]DIRECTORIES[/b]
  Indexed     [green]{stats.directories_indexed:,}[/]
  Skipped     [dim]{stats.directories_skipped:,}[/]

[b]ARTIFACTS[/b]
  Listed      [cyan]{stats.artifacts_listed:,}[/]
  Unreadable  [yellow]{stats.entries_skipped:,}[/]

[b]JAVADOC[/b]
  Extracted   [magenta]{stats.archives_extracted:,}[/]
  Failed      [red]{stats.extraction_failures:,}[/]
  Pages       [blue]{stats.pages_patched:,}[/]""")


class CurrentDirectoryDisplay(Static):
    """Display for the most recently processed directory."""

    def compose(self) -> ComposeResult:
        yield Static("[dim]Waiting for a root...[/]", id="current-content")

    def update_path(self, path: str) -> None:
        content = self.query_one("#current-content", Static)
        if path:
            display = path if len(path) < 50 else "..." + path[-47:]
            content.update(f"[bold cyan]>[/] {display}")
        else:
            content.update("[dim]Waiting for a root...[/]")


class EventTable(DataTable):
    """Live walk event log as a table."""

    KIND_STYLES = {
        "indexed": "[green]indexed[/]",
        "skipped": "[dim]skipped[/]",
        "extracted": "[magenta]javadoc[/]",
        "extract_failed": "[red]javadoc failed[/]",
        "entry_skipped": "[yellow]unreadable[/]",
    }

    def on_mount(self) -> None:
        self.add_columns("Path", "Event", "Detail")
        self.cursor_type = "row"

    def add_event(self, event: WalkEvent) -> None:
        path = event.path or "root"
        if len(path) > 40:
            path = "..." + path[-37:]
        self.add_row(path, self.KIND_STYLES.get(event.kind, event.kind), event.detail or "")
        self.scroll_end()


class FlightDeck(App):
    """The mavenindex Flight Deck - generation console."""

    class StatusUpdated(Message):
        def __init__(self, run: RunStatus) -> None:
            self.run = run
            super().__init__()

    class LogMessage(Message):
        def __init__(self, message: str) -> None:
            self.message = message
            super().__init__()

    class WalkProgress(Message):
        def __init__(self, event: WalkEvent) -> None:
            self.event = event
            super().__init__()

    CSS = """
    #main-container {
        layout: horizontal;
        height: 100%;
    }

    #left-panel {
        width: 35;
        background: $surface-darken-1;
        border-right: solid $primary-darken-2;
        padding: 1;
    }

    #center-panel {
        width: 1fr;
        padding: 1;
    }

    #right-panel {
        width: 30;
        background: $surface-darken-1;
        border-left: solid $primary-darken-2;
        padding: 1;
    }

    StatsPanel {
        height: auto;
        padding: 1;
        background: $surface-darken-2;
        border: round $primary;
        margin-bottom: 1;
    }

    CurrentDirectoryDisplay {
        height: 3;
        padding: 1;
        background: $boost;
        border: round $secondary;
        margin-bottom: 1;
    }

    #action-buttons {
        layout: horizontal;
        height: 3;
        margin-bottom: 1;
    }

    #action-buttons Button {
        margin-right: 1;
    }

    EventTable {
        height: 1fr;
        border: round $primary-darken-1;
    }

    #log-panel {
        height: 12;
        border: round $primary-darken-2;
        background: $surface-darken-2;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }

    DirectoryTree {
        height: 100%;
        border: round $primary-darken-1;
        background: $surface-darken-2;
    }
    """

    BINDINGS = [
        Binding("g", "generate", "Generate", show=True),
        Binding("c", "clear", "Clear", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    TITLE = "mavenindex Flight Deck"
    SUB_TITLE = "Index Generation Console"

    def __init__(self, root: str | None = None) -> None:
        super().__init__()
        self.initial_root = root or ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            with Vertical(id="left-panel"):
                yield Label("MISSION CONTROL", classes="section-title")
                yield StatsPanel()
                yield CurrentDirectoryDisplay()
                yield Rule()
                yield Label("Repository Root")
                yield Input(
                    value=self.initial_root,
                    placeholder="Enter repository root...",
                    id="root-input",
                )
                with Horizontal(id="action-buttons"):
                    yield Button("GENERATE", id="generate-btn", variant="success")
                    yield Button("Clear", id="clear-btn", variant="warning")

            with Vertical(id="center-panel"):
                yield Label("WALK LOG", classes="section-title")
                yield EventTable(id="event-log")
                yield Rule()
                yield Label("SYSTEM LOG", classes="section-title")
                yield Log(id="log-panel", highlight=True, auto_scroll=True)

            with Vertical(id="right-panel"):
                yield Label("FILE BROWSER", classes="section-title")
                yield DirectoryTree(Path(self.initial_root or Path.cwd()), id="dir-tree")

        yield Footer()

    def on_mount(self) -> None:
        self._log("Flight Deck initialized")
        self._log("Enter a repository root and press GENERATE to begin")

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.query_one("#log-panel", Log).write_line(f"[{timestamp}] {message}")

    def on_flight_deck_status_updated(self, event: StatusUpdated) -> None:
        self.query_one(StatsPanel).update_display(event.run)
        self.query_one(CurrentDirectoryDisplay).update_path(event.run.current)

    def on_flight_deck_log_message(self, event: LogMessage) -> None:
        self._log(event.message)

    def on_flight_deck_walk_progress(self, event: WalkProgress) -> None:
        self.query_one("#event-log", EventTable).add_event(event.event)

    def on_directory_tree_directory_selected(
        self, event: DirectoryTree.DirectorySelected
    ) -> None:
        self.query_one("#root-input", Input).value = str(event.path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "generate-btn":
            self.action_generate()
        elif event.button.id == "clear-btn":
            self.action_clear()

    def action_clear(self) -> None:
        """Clear the logs and reset stats."""
        self.query_one(StatsPanel).update_display(RunStatus())
        self.query_one(CurrentDirectoryDisplay).update_path("")
        self.query_one("#event-log", EventTable).clear()
        self.query_one("#log-panel", Log).clear()
        self._log("Cleared - ready for new run")

    def action_generate(self) -> None:
        """Start a generation run."""
        root = self.query_one("#root-input", Input).value.strip()
        if not root:
            self._log("ERROR: No repository root specified")
            return
        self.run_generate(root)

    @work(exclusive=True)
    async def run_generate(self, root: str) -> None:
        """Run the generator on the app's event loop."""
        root_path = Path(root)
        run = RunStatus(status="running", start_time=datetime.now())
        self.post_message(self.StatusUpdated(run.copy()))

        if not root_path.is_dir():
            run.status = "error"
            self.post_message(self.StatusUpdated(run.copy()))
            self.post_message(self.LogMessage(f"ERROR: Not a directory: {root}"))
            return

        self.post_message(self.LogMessage(f"Indexing {root_path.resolve()}"))
        deck = self

        class DeckListener:
            def notify(self, event: WalkEvent, stats: WalkStats) -> None:
                run.stats = stats
                run.current = event.path or "root"
                deck.post_message(deck.WalkProgress(event))
                deck.post_message(deck.StatusUpdated(run.copy()))

        try:
            run.stats = await generate(root_path, listener=DeckListener())
        except (IndexWriteError, OSError) as e:
            run.status = "error"
            run.end_time = datetime.now()
            self.post_message(self.StatusUpdated(run.copy()))
            self.post_message(self.LogMessage(f"ERROR: {e}"))
            return

        run.status = "complete"
        run.current = ""
        run.end_time = datetime.now()
        self.post_message(self.StatusUpdated(run.copy()))
        self.post_message(
            self.LogMessage(
                f"COMPLETE: {run.stats.directories_indexed} directories -> "
                f"{SEARCH_INDEX_FILENAME}"
            )
        )


def main(root: str | None = None) -> None:
    """Run the Flight Deck TUI."""
    app = FlightDeck(root)
    app.run()


if __name__ == "__main__":
    main()
