"""PIN authentication for the viewer.

A correct PIN produces an AuthSession that stays valid for a fixed number
of days. Sessions are persisted to a small JSON file so the viewer does
not ask again on every launch.
"""

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from photo_stories.app.logging_config import get_logger

logger = get_logger(__name__)

PIN_LENGTH = 6
SECONDS_PER_DAY = 24 * 60 * 60

Clock = Callable[[], float]


@dataclass(frozen=True)
class AuthSession:
    """An authenticated viewer session.

    Attributes:
        authenticated_at: Unix time the PIN was accepted
        expires_at: Unix time after which the PIN is required again
    """

    authenticated_at: float
    expires_at: float

    def is_valid(self, now: Optional[float] = None) -> bool:
        """Check whether the session has not yet expired."""
        if now is None:
            now = time.time()
        return now < self.expires_at

    @classmethod
    def from_dict(cls, data: dict) -> "AuthSession":
        return cls(
            authenticated_at=float(data["authenticatedAt"]),
            expires_at=float(data["expiresAt"]),
        )

    def to_dict(self) -> dict[str, float]:
        return {"authenticatedAt": self.authenticated_at, "expiresAt": self.expires_at}


class PinAuthenticator:
    """Checks PIN attempts and issues sessions."""

    def __init__(self, pin: str, expiry_days: int = 30, clock: Clock = time.time):
        """Initialize the authenticator.

        Args:
            pin: Expected PIN
            expiry_days: Lifetime of an issued session in days
            clock: Time source returning Unix seconds
        """
        self.pin = pin
        self.expiry_days = expiry_days
        self._clock = clock

    def authenticate(self, attempt: str) -> Optional[AuthSession]:
        """Check a PIN attempt.

        Args:
            attempt: Digits entered by the viewer

        Returns:
            A new AuthSession on success, None on a wrong PIN
        """
        if attempt != self.pin:
            logger.warning("Rejected PIN attempt")
            return None

        now = self._clock()
        logger.info(f"PIN accepted, session valid for {self.expiry_days} days")
        return AuthSession(
            authenticated_at=now,
            expires_at=now + self.expiry_days * SECONDS_PER_DAY,
        )


class PinEntry:
    """Digit buffer behind the PIN keypad.

    Holds up to PIN_LENGTH digits; the attempt is complete, and should be
    submitted, as soon as the last digit is entered.
    """

    def __init__(self, length: int = PIN_LENGTH):
        self.length = length
        self.digits = ""

    @property
    def is_complete(self) -> bool:
        return len(self.digits) == self.length

    @property
    def masked(self) -> str:
        """Filled and empty slots for display, e.g. "●●○○○○"."""
        return "●" * len(self.digits) + "○" * (self.length - len(self.digits))

    def push(self, digit: str) -> bool:
        """Add a digit.

        Args:
            digit: Single character "0" to "9"

        Returns:
            True when this digit completed the PIN
        """
        if len(digit) != 1 or not digit.isdigit() or self.is_complete:
            return False
        self.digits += digit
        return self.is_complete

    def backspace(self) -> None:
        self.digits = self.digits[:-1]

    def clear(self) -> None:
        self.digits = ""


class AuthStore:
    """Persists the auth session as JSON."""

    def __init__(self, path: Path, clock: Clock = time.time):
        self.path = path
        self._clock = clock

    def load(self) -> Optional[AuthSession]:
        """Load a still-valid session.

        Returns:
            The stored session, or None if missing, unreadable or expired
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                session = AuthSession.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable auth session {self.path}: {e}")
            return None

        if not session.is_valid(self._clock()):
            logger.info("Stored auth session has expired")
            self.clear()
            return None

        return session

    def save(self, session: AuthSession) -> None:
        """Write a session to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(session.to_dict(), f, indent=2)
        logger.debug(f"Saved auth session to {self.path}")

    def clear(self) -> None:
        """Forget the stored session."""
        if self.path.exists():
            self.path.unlink()
