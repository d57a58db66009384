"""Tests for PIN authentication."""

import pytest

from photo_stories.app.auth import (
    SECONDS_PER_DAY,
    AuthSession,
    AuthStore,
    PinAuthenticator,
    PinEntry,
)


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPinAuthenticator:
    """Tests for PinAuthenticator."""

    def test_correct_pin(self):
        clock = FakeClock()
        session = PinAuthenticator("123456", expiry_days=30, clock=clock).authenticate("123456")

        assert session is not None
        assert session.authenticated_at == clock.now
        assert session.expires_at == clock.now + 30 * SECONDS_PER_DAY

    def test_wrong_pin(self):
        assert PinAuthenticator("123456").authenticate("654321") is None

    def test_partial_pin(self):
        assert PinAuthenticator("123456").authenticate("12345") is None


class TestAuthSession:
    def test_valid_until_expiry(self):
        session = AuthSession(authenticated_at=0, expires_at=100)

        assert session.is_valid(now=99.9)
        assert not session.is_valid(now=100)

    def test_dict_keys(self):
        session = AuthSession(authenticated_at=1.0, expires_at=2.0)

        assert session.to_dict() == {"authenticatedAt": 1.0, "expiresAt": 2.0}
        assert AuthSession.from_dict(session.to_dict()) == session


class TestPinEntry:
    """Tests for the keypad digit buffer."""

    def test_completes_on_sixth_digit(self):
        entry = PinEntry()

        results = [entry.push(d) for d in "123456"]

        assert results == [False] * 5 + [True]
        assert entry.is_complete
        assert entry.digits == "123456"

    def test_ignores_extra_digits(self):
        entry = PinEntry()
        for d in "123456":
            entry.push(d)

        assert entry.push("7") is False
        assert entry.digits == "123456"

    @pytest.mark.parametrize("key", ["a", "", "12", " "])
    def test_rejects_non_digits(self, key):
        entry = PinEntry()

        assert entry.push(key) is False
        assert entry.digits == ""

    def test_masked(self):
        entry = PinEntry()
        entry.push("1")
        entry.push("2")

        assert entry.masked == "●●○○○○"

    def test_backspace_and_clear(self):
        entry = PinEntry()
        for d in "987":
            entry.push(d)

        entry.backspace()
        assert entry.digits == "98"

        entry.clear()
        assert entry.digits == ""
        entry.backspace()
        assert entry.digits == ""


class TestAuthStore:
    """Tests for session persistence."""

    def test_save_and_load(self, tmp_path):
        clock = FakeClock(50)
        store = AuthStore(tmp_path / "state" / "auth.json", clock=clock)
        session = AuthSession(authenticated_at=0, expires_at=100)

        store.save(session)

        assert store.load() == session

    def test_missing_file(self, tmp_path):
        assert AuthStore(tmp_path / "auth.json").load() is None

    def test_expired_session_is_cleared(self, tmp_path):
        path = tmp_path / "auth.json"
        store = AuthStore(path, clock=FakeClock(500))
        store.save(AuthSession(authenticated_at=0, expires_at=100))

        assert store.load() is None
        assert not path.exists()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "auth.json"
        path.write_text("not json", encoding="utf-8")

        assert AuthStore(path).load() is None

    def test_clear(self, tmp_path):
        path = tmp_path / "auth.json"
        store = AuthStore(path, clock=FakeClock(0))
        store.save(AuthSession(authenticated_at=0, expires_at=100))

        store.clear()
        store.clear()

        assert not path.exists()
