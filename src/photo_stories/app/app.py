"""Main TUI application for the Photo Stories viewer.

Textual-based application that asks for the viewer PIN, lists the
available trips, and plays a selected trip as a slideshow.
"""

from textual.app import App

from photo_stories.app.auth import AuthSession, AuthStore, PinAuthenticator
from photo_stories.app.config import AppConfig
from photo_stories.app.device import DeviceType
from photo_stories.app.logging_config import get_logger
from photo_stories.app.services.photo_cache import PhotoCache
from photo_stories.app.state import AppScreen, AppState
from photo_stories.core.trip_store import TripStore

logger = get_logger(__name__)


class PhotoStoriesApp(App):
    """Main Photo Stories viewer application."""

    CSS_PATH = "screens/app.tcss"
    TITLE = "Photo Stories"
    SUB_TITLE = "Trip Slideshows"

    def __init__(self, config: AppConfig, device_type: DeviceType = DeviceType.TABLET, *args, **kwargs):
        """Initialize the application.

        Args:
            config: Application configuration
            device_type: Display kind, resolved once by the caller
        """
        super().__init__(*args, **kwargs)

        self.config = config
        self.config.ensure_directories()

        self.state = AppState(device_type=device_type)

        self.store = TripStore(config.data_dir, config.music_dir)
        self.authenticator = PinAuthenticator(config.pin, expiry_days=config.auth_expiry_days)
        self.auth_store = AuthStore(config.auth_path)
        self.photo_cache = PhotoCache(config.cache_dir)

    def on_mount(self) -> None:
        """Handle app mount event."""
        session = self.auth_store.load()
        if session is not None:
            logger.info("Restored auth session, skipping PIN")
            self.state.set_auth_session(session)
            self.state.current_screen = AppScreen.HOME
        else:
            self.state.current_screen = AppScreen.PIN_AUTH

        logger.info(f"App mounted on {self.state.device_type.value}, initial screen: {self.state.current_screen.name}")
        self.push_screen(self._create_screen(self.state.current_screen))

    def _create_screen(self, screen: AppScreen):
        """Create a fresh screen instance.

        Args:
            screen: Screen enum value

        Returns:
            New screen instance
        """
        logger.debug(f"Creating fresh screen instance: {screen.name}")
        if screen == AppScreen.PIN_AUTH:
            from photo_stories.app.screens.pin_auth import PinAuthScreen
            return PinAuthScreen(self.state, self.authenticator)
        elif screen == AppScreen.HOME:
            from photo_stories.app.screens.home import HomeScreen
            return HomeScreen(self.state, self.store)
        elif screen == AppScreen.SLIDESHOW:
            from photo_stories.app.screens.slideshow import SlideshowScreen
            return SlideshowScreen(self.state, self.store, self.config, self.photo_cache)

    def on_authenticated(self, session: AuthSession) -> None:
        """Store a fresh session and replace the PIN screen with the trip list.

        Args:
            session: Session issued for the accepted PIN
        """
        self.auth_store.save(session)
        self.state.set_auth_session(session)
        self.state.current_screen = AppScreen.HOME
        self.state.previous_screen = None
        self.switch_screen(self._create_screen(AppScreen.HOME))

    def navigate_to(self, screen: AppScreen) -> None:
        """Navigate to a screen.

        Args:
            screen: Screen to navigate to
        """
        if not self.state.is_authenticated:
            logger.warning(f"Session expired before opening {screen.name}")
            self.action_lock()
            return

        logger.info(f"Navigate to: {screen.name} (from {self.state.current_screen.name})")
        self.state.navigate_to(screen)
        self.push_screen(self._create_screen(screen))

    def navigate_back(self) -> None:
        """Navigate back to the previous screen."""
        if self.state.navigate_back():
            self.pop_screen()
            logger.info(f"Navigated back to {self.state.current_screen.name}")
        else:
            logger.warning("Cannot navigate back - no previous screen")

    def action_lock(self) -> None:
        """Forget the session and return to the PIN screen."""
        logger.info("Locking viewer")
        self.auth_store.clear()
        self.state.set_auth_session(None)
        self.state.current_screen = AppScreen.PIN_AUTH
        self.state.previous_screen = None

        while len(self.screen_stack) > 2:
            self.pop_screen()
        self.switch_screen(self._create_screen(AppScreen.PIN_AUTH))

    def action_back(self) -> None:
        """Go back to previous screen."""
        self.navigate_back()
