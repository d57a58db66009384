"""Tests for viewer application state."""

import time

from photo_stories.app.auth import AuthSession
from photo_stories.app.state import AppScreen, AppState


class TestAppState:
    """Tests for AppState."""

    def test_initial_state(self):
        state = AppState()

        assert state.current_screen == AppScreen.PIN_AUTH
        assert not state.is_authenticated

    def test_authenticated_with_valid_session(self):
        state = AppState()
        now = time.time()

        state.set_auth_session(AuthSession(authenticated_at=now, expires_at=now + 60))

        assert state.is_authenticated

    def test_expired_session_is_not_authenticated(self):
        state = AppState(auth_session=AuthSession(authenticated_at=0, expires_at=1))

        assert not state.is_authenticated

    def test_navigate_to_and_back(self):
        state = AppState()
        state.navigate_to(AppScreen.HOME)
        state.navigate_to(AppScreen.SLIDESHOW)

        assert state.previous_screen == AppScreen.HOME
        assert state.navigate_back()
        assert state.current_screen == AppScreen.HOME
        assert not state.navigate_back()

    def test_listeners(self):
        state = AppState()
        seen = []
        state.add_listener("selected_trip_id", seen.append)

        state.select_trip("mexico-city-2024")
        state.select_trip(None)

        assert seen == ["mexico-city-2024", None]

    def test_remove_listener(self):
        state = AppState()
        seen = []
        state.add_listener("error_message", seen.append)
        state.remove_listener("error_message", seen.append)

        state.set_error("boom")

        assert seen == []
        assert state.error_message == "boom"

    def test_failing_listener_does_not_break_others(self):
        state = AppState()
        seen = []

        def broken(value):
            raise RuntimeError("listener bug")

        state.add_listener("current_screen", broken)
        state.add_listener("current_screen", seen.append)

        state.navigate_to(AppScreen.HOME)

        assert seen == [AppScreen.HOME]

    def test_clear_error_and_loading(self):
        state = AppState()
        state.set_error("oops")
        state.set_loading(True)

        state.clear_error()

        assert state.error_message is None
        assert state.is_loading
