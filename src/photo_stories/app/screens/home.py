"""Trip list screen.

Displays the trips from the trips index and opens the selected one in
the slideshow.
"""

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Label

from photo_stories.app.logging_config import get_logger
from photo_stories.app.render import render_safely
from photo_stories.app.state import AppScreen, AppState
from photo_stories.core.models import TripSummary
from photo_stories.core.trip_store import TripStore

logger = get_logger(__name__)


class HomeScreen(Screen):
    """Screen for choosing a trip to play."""

    BINDINGS = [
        ("enter", "play_trip", "Play"),
        ("r", "refresh", "Refresh"),
        ("l", "app.lock", "Lock"),
        ("q", "app.quit", "Quit"),
    ]

    def __init__(self, state: AppState, store: TripStore):
        """Initialize the screen.

        Args:
            state: Application state
            store: Trip storage
        """
        super().__init__()
        self.state = state
        self.store = store
        self.trips: list[TripSummary] = []

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()

        with Vertical():
            yield Label("[bold]Photo Stories[/bold]", id="title")
            yield Label("Choose a trip and press Enter to start the slideshow", id="subtitle")
            yield Label("", id="home_status")

            table = DataTable(id="trip_table", cursor_type="row")
            table.add_columns("Trip", "Description", "Photos", "Duration", "Audio", "Created")
            yield table

            with Horizontal(id="buttons"):
                yield Button("Play", id="btn_play", variant="primary")
                yield Button("Refresh", id="btn_refresh")
                yield Button("Lock", id="btn_lock")
                yield Button("Quit", id="btn_quit")

        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event."""
        logger.info("HomeScreen mounted")
        self._load_trips()

    def on_screen_resume(self, event: events.ScreenResume) -> None:
        """Handle screen resume event (when the slideshow is popped)."""
        self.call_after_refresh(self._restore_focus)

    def _load_trips(self) -> None:
        """Load and display trips."""
        table = self.query_one("#trip_table", DataTable)
        status = self.query_one("#home_status", Label)
        table.clear()

        result = render_safely(self.store.list_trips, title="Error Loading Trips")
        if not result.is_ok:
            self.trips = []
            status.update(f"[red]{result.error.title}: {result.error.message}[/red]")
            return

        self.trips = result.value
        if not self.trips:
            status.update("[yellow]No trips available yet[/yellow]")
            return

        status.update(f"{len(self.trips)} trip(s)")
        for trip in self.trips:
            table.add_row(
                trip.title,
                trip.description,
                str(trip.photo_count),
                trip.formatted_duration,
                "♪" if trip.has_audio else "",
                trip.created_date,
                key=trip.id,
            )
        table.focus()

    def _restore_focus(self) -> None:
        table = self.query_one("#trip_table", DataTable)
        if len(table.rows) > 0:
            table.focus()

    def _open_trip(self, trip_id: str) -> None:
        logger.info(f"Opening trip: {trip_id}")
        self.state.select_trip(trip_id)
        self.app.navigate_to(AppScreen.SLIDESHOW)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle row selection."""
        self._open_trip(event.row_key.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn_play":
            self.action_play_trip()
        elif button_id == "btn_refresh":
            self.action_refresh()
        elif button_id == "btn_lock":
            self.app.action_lock()
        elif button_id == "btn_quit":
            self.app.exit()

    def action_play_trip(self) -> None:
        """Play the highlighted trip."""
        table = self.query_one("#trip_table", DataTable)
        rows = list(table.rows.keys())
        if not rows or table.cursor_row is None or table.cursor_row >= len(rows):
            self.notify("No trip selected", severity="warning")
            return
        self._open_trip(rows[table.cursor_row].value)

    def action_refresh(self) -> None:
        self._load_trips()
