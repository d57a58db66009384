"""PIN entry screen.

Six-digit keypad that submits as soon as the last digit is entered.
"""

from textual import events
from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, Static

from photo_stories.app.auth import PinAuthenticator, PinEntry
from photo_stories.app.logging_config import get_logger
from photo_stories.app.state import AppState

logger = get_logger(__name__)

KEYPAD = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "clear", "0", "back"]


class PinAuthScreen(Screen):
    """Screen asking for the viewer PIN."""

    BINDINGS = [
        ("backspace", "backspace", "Delete"),
        ("escape", "clear", "Clear"),
        ("q", "app.quit", "Quit"),
    ]

    def __init__(self, state: AppState, authenticator: PinAuthenticator):
        """Initialize the screen.

        Args:
            state: Application state
            authenticator: PIN checker
        """
        super().__init__()
        self.state = state
        self.authenticator = authenticator
        self.entry = PinEntry()

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()

        with Vertical(id="pin_panel"):
            yield Label("[bold]Photo Stories[/bold]", id="title")
            yield Label("Enter PIN to continue", id="subtitle")
            yield Static(self.entry.masked, id="pin_display")
            yield Label("", id="pin_error")

            with Grid(id="keypad"):
                for key in KEYPAD:
                    label = {"clear": "C", "back": "⌫"}.get(key, key)
                    yield Button(label, id=f"key_{key}")

        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event."""
        logger.info("PinAuthScreen mounted")

    def _refresh_display(self) -> None:
        self.query_one("#pin_display", Static).update(self.entry.masked)

    def _set_error(self, message: str) -> None:
        self.query_one("#pin_error", Label).update(f"[red]{message}[/red]" if message else "")

    def enter_digit(self, digit: str) -> None:
        """Add a digit and submit once the PIN is complete.

        Args:
            digit: Single digit character
        """
        if self.entry.digits == "":
            self._set_error("")
        completed = self.entry.push(digit)
        self._refresh_display()
        if completed:
            self._submit()

    def _submit(self) -> None:
        """Check the entered PIN."""
        session = self.authenticator.authenticate(self.entry.digits)
        self.entry.clear()
        self._refresh_display()

        if session is None:
            self._set_error("Incorrect PIN. Please try again.")
            return

        self.app.on_authenticated(session)

    def on_key(self, event: events.Key) -> None:
        """Accept digits typed on the keyboard."""
        if event.character and event.character.isdigit():
            event.stop()
            self.enter_digit(event.character)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle keypad presses."""
        key = (event.button.id or "").removeprefix("key_")

        if key == "clear":
            self.action_clear()
        elif key == "back":
            self.action_backspace()
        elif key.isdigit():
            self.enter_digit(key)

    def action_backspace(self) -> None:
        self.entry.backspace()
        self._refresh_display()

    def action_clear(self) -> None:
        self.entry.clear()
        self._refresh_display()
        self._set_error("")
