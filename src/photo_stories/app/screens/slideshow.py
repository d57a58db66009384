"""Slideshow screen.

Plays a trip on a 100 ms tick: shows the current photo with its caption,
the controls overlay, and the music attribution, and keeps the music
player in step with the session clock.
"""

import time
from functools import partial
from typing import Optional

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Button, Label, ProgressBar, Static

from photo_stories.app.config import AppConfig
from photo_stories.app.logging_config import get_logger
from photo_stories.app.render import render_safely
from photo_stories.app.services.music import MusicPlayer
from photo_stories.app.services.photo_cache import PhotoCache
from photo_stories.app.services.slideshow import TICK_SECONDS, PlaybackPhase, SlideshowSession
from photo_stories.app.state import AppState
from photo_stories.core.trip_store import TripStore

logger = get_logger(__name__)

COUNTDOWN_HINT = "Press Space to pause, Arrow keys to navigate, Escape to exit"


class SlideshowScreen(Screen):
    """Screen playing one trip."""

    BINDINGS = [
        ("space", "toggle", "Play/Pause"),
        ("left", "previous", "Previous"),
        ("right", "next", "Next"),
        ("o", "open_photo", "Open Photo"),
        ("escape", "exit", "Exit"),
    ]

    def __init__(
        self,
        state: AppState,
        store: TripStore,
        config: AppConfig,
        photo_cache: Optional[PhotoCache] = None,
    ):
        """Initialize the screen.

        Args:
            state: Application state (selected_trip_id names the trip)
            store: Trip storage
            config: Application configuration
            photo_cache: Cache used to prefetch upcoming photos
        """
        super().__init__()
        self.state = state
        self.store = store
        self.config = config
        self.photo_cache = photo_cache

        self.session: Optional[SlideshowSession] = None
        self.music: Optional[MusicPlayer] = None
        self._tick_timer: Optional[Timer] = None
        self._countdown_timer: Optional[Timer] = None
        self._last_activity = time.monotonic()
        self._last_index = -1

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        with Vertical(id="countdown"):
            yield Label("Starting slideshow in...", id="countdown_title")
            yield Label("", id="countdown_number")
            yield Button("Cancel Auto-play", id="btn_cancel_countdown")
            yield Label(COUNTDOWN_HINT, id="countdown_hint")

        with Vertical(id="error_view"):
            yield Label("", id="error_title")
            yield Label("", id="error_message")
            yield Button("Back to Home", id="btn_back", variant="primary")

        with Vertical(id="stage"):
            yield Static("", id="photo")
            yield Label("", id="caption")
            yield Label("", id="attribution")

            with Vertical(id="controls"):
                yield ProgressBar(total=100, show_eta=False, show_percentage=False, id="progress")
                with Horizontal(id="controls_bottom"):
                    yield Label("", id="position")
                    yield Button("▶ Play", id="btn_play_pause", variant="primary")
                    yield Button("✕ Exit", id="btn_exit")

    def on_mount(self) -> None:
        """Load the trip and start the session."""
        logger.info(f"SlideshowScreen mounted for trip {self.state.selected_trip_id}")

        self.query_one("#countdown").display = False
        self.query_one("#error_view").display = False

        result = render_safely(self._build_session, title="Error Loading Trip")
        if not result.is_ok:
            self._show_error(result.error.title, result.error.message or "Trip not found")
            return

        self.session = result.value
        if not self.session.has_photos:
            self._show_error("No Photos", "This trip doesn't have any photos yet.")
            return

        self.music = MusicPlayer(self.config.music_dir, volume=self.session.volume)

        if self.session.start() == PlaybackPhase.COUNTDOWN:
            self._show_countdown()
            self._countdown_timer = self.set_interval(1.0, self._on_countdown_tick)

        self._tick_timer = self.set_interval(TICK_SECONDS, self._on_tick)
        self._refresh_view()

    def on_unmount(self) -> None:
        """Stop timers and music when leaving the slideshow."""
        for timer in (self._tick_timer, self._countdown_timer):
            if timer is not None:
                timer.stop()
        if self.music is not None:
            self.music.close()
        if self.session is not None:
            self.session.stop()

    def _build_session(self) -> SlideshowSession:
        """Load the selected trip and its music pool."""
        trip = self.store.load_trip(self.state.selected_trip_id)
        tracks = self.store.load_tracks() if trip.background_music.enabled else []
        return SlideshowSession(
            trip,
            tracks,
            device_type=self.state.device_type,
            countdown_seconds=self.config.countdown_seconds,
            default_volume=self.config.music_volume,
        )

    def _show_error(self, title: str, message: str) -> None:
        self.query_one("#stage").display = False
        self.query_one("#error_title", Label).update(f"[bold]{title}[/bold]")
        self.query_one("#error_message", Label).update(message)
        self.query_one("#error_view").display = True
        self.query_one("#btn_back", Button).focus()

    def _show_countdown(self) -> None:
        self.query_one("#stage").display = False
        self.query_one("#countdown").display = True
        self.query_one("#countdown_number", Label).update(str(self.session.countdown_remaining))

    def _hide_countdown(self) -> None:
        if self._countdown_timer is not None:
            self._countdown_timer.stop()
            self._countdown_timer = None
        self.query_one("#countdown").display = False
        self.query_one("#stage").display = True
        self._touch()

    def _on_countdown_tick(self) -> None:
        if self.session.countdown_tick() != PlaybackPhase.COUNTDOWN:
            self._hide_countdown()
        else:
            self.query_one("#countdown_number", Label).update(str(self.session.countdown_remaining))
        self._refresh_view()

    def _on_tick(self) -> None:
        self.session.tick()
        self._refresh_view()

    def _touch(self) -> None:
        """Record viewer activity and bring the controls back."""
        self._last_activity = time.monotonic()
        self.query_one("#controls").display = True

    def _controls_visible(self) -> bool:
        """Controls auto-hide on TVs while playing."""
        if not self.session.device_type.autoplays or not self.session.is_playing:
            return True
        idle_ms = (time.monotonic() - self._last_activity) * 1000
        return idle_ms < self.config.controls_hide_delay_ms

    def _refresh_view(self) -> None:
        """Render the session's current photo, controls, and music."""
        session = self.session
        photo = session.current_photo
        current = session.current_track

        if photo is not None:
            kind = "▶ Video" if photo.is_video else "Photo"
            self.query_one("#photo", Static).update(f"[bold]{kind}[/bold]\n[dim]{photo.url}[/dim]")
            self.query_one("#caption", Label).update(photo.caption or "")

        self.query_one("#attribution", Label).update(current.track.attribution if current else "")
        self.query_one("#position", Label).update(session.position_label)
        self.query_one("#progress", ProgressBar).update(progress=session.progress)
        self.query_one("#btn_play_pause", Button).label = "❚❚ Pause" if session.is_playing else "▶ Play"
        self.query_one("#controls").display = self._controls_visible()

        if self.music is not None:
            self.music.sync(current, session.is_playing)

        if session.current_index != self._last_index:
            self._last_index = session.current_index
            self._preload()

    def _preload(self) -> None:
        """Prefetch the next photos in a worker thread."""
        if self.photo_cache is None:
            return
        upcoming = self.session.upcoming_photos(self.config.preload_count)
        if upcoming:
            self.run_worker(
                partial(self.photo_cache.preload, upcoming),
                thread=True,
                exclusive=True,
                group="preload",
            )

    def on_key(self, event: events.Key) -> None:
        if self.session is not None:
            self._touch()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn_cancel_countdown":
            self.session.cancel_countdown()
            self._hide_countdown()
            self._refresh_view()
        elif button_id == "btn_play_pause":
            self.action_toggle()
        elif button_id in ("btn_exit", "btn_back"):
            self.action_exit()

    def action_toggle(self) -> None:
        """Toggle play/pause (skips the countdown if it is running)."""
        if self.session is None or not self.session.has_photos:
            return
        was_countdown = self.session.phase == PlaybackPhase.COUNTDOWN
        self.session.toggle()
        if was_countdown:
            self._hide_countdown()
        self._refresh_view()

    def action_previous(self) -> None:
        if self.session is None or not self.session.has_photos:
            return
        self.session.previous()
        self._refresh_view()

    def action_next(self) -> None:
        if self.session is None or not self.session.has_photos:
            return
        self.session.next()
        self._refresh_view()

    def action_open_photo(self) -> None:
        """Open the current photo outside the terminal."""
        if self.session is None or self.session.current_photo is None:
            return
        photo = self.session.current_photo
        target = photo.video_url if photo.is_video and photo.video_url else photo.url
        if self.photo_cache is not None and not photo.is_video and self.photo_cache.is_cached(photo):
            target = self.photo_cache.get_cache_path(photo).as_uri()
        self.app.open_url(target)

    def action_exit(self) -> None:
        """Leave the slideshow for the trip list."""
        logger.info("Exiting slideshow")
        self.app.navigate_back()
