"""Application state for the photo-stories viewer.

Manages reactive state for the TUI with observable properties.
Provides centralized state management for screens.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from photo_stories.app.auth import AuthSession
from photo_stories.app.device import DeviceType
from photo_stories.app.logging_config import get_logger

logger = get_logger(__name__)


class AppScreen(Enum):
    """Available screens in the app."""

    PIN_AUTH = auto()
    HOME = auto()
    SLIDESHOW = auto()


@dataclass
class AppState:
    """Reactive application state.

    Attributes:
        device_type: Display kind, resolved once at startup
        auth_session: Current auth session (None until the PIN is entered)
        current_screen: Currently active screen
        previous_screen: Screen to return to (for back navigation)
        selected_trip_id: Trip opened in the slideshow
        is_loading: Whether an async operation is in progress
        error_message: Current error message to display
    """

    device_type: DeviceType = DeviceType.TABLET
    auth_session: Optional[AuthSession] = None

    # Navigation
    current_screen: AppScreen = AppScreen.PIN_AUTH
    previous_screen: Optional[AppScreen] = None

    selected_trip_id: Optional[str] = None

    # UI state
    is_loading: bool = False
    error_message: Optional[str] = None

    # Callbacks for state changes
    _listeners: dict[str, list[Callable]] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.auth_session is not None and self.auth_session.is_valid()

    def add_listener(self, property_name: str, callback: Callable) -> None:
        """Add a listener for a property change.

        Args:
            property_name: Name of the property to watch
            callback: Function to call when property changes
        """
        self._listeners.setdefault(property_name, []).append(callback)

    def remove_listener(self, property_name: str, callback: Callable) -> None:
        """Remove a property change listener.

        Args:
            property_name: Name of the property
            callback: Callback to remove
        """
        if property_name in self._listeners:
            self._listeners[property_name] = [
                cb for cb in self._listeners[property_name] if cb != callback
            ]

    def _notify(self, property_name: str, value) -> None:
        """Notify listeners of a property change."""
        for callback in self._listeners.get(property_name, []):
            try:
                callback(value)
            except Exception:
                logger.exception(f"Listener for {property_name} failed")

    def set_auth_session(self, session: Optional[AuthSession]) -> None:
        """Set or clear the auth session.

        Args:
            session: New session (None to sign out)
        """
        self.auth_session = session
        self._notify("auth_session", session)

    def navigate_to(self, screen: AppScreen) -> None:
        """Navigate to a screen, saving current for back navigation.

        Args:
            screen: Screen to navigate to
        """
        self.previous_screen = self.current_screen
        self.current_screen = screen
        self._notify("current_screen", screen)

    def navigate_back(self) -> bool:
        """Navigate back to the previous screen.

        Returns:
            True if navigation occurred
        """
        if self.previous_screen:
            self.current_screen = self.previous_screen
            self.previous_screen = None
            self._notify("current_screen", self.current_screen)
            return True
        return False

    def select_trip(self, trip_id: Optional[str]) -> None:
        """Select the trip to play.

        Args:
            trip_id: Trip ID (None to clear)
        """
        self.selected_trip_id = trip_id
        self._notify("selected_trip_id", trip_id)

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        self._notify("is_loading", loading)

    def set_error(self, message: Optional[str]) -> None:
        """Set error message.

        Args:
            message: Error message (None to clear)
        """
        self.error_message = message
        self._notify("error_message", message)

    def clear_error(self) -> None:
        """Clear the current error message."""
        self.set_error(None)
