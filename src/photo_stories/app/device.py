"""Device type detection.

The device type is resolved once per session and decides whether the
slideshow auto-starts with a countdown (TVs) or waits for the viewer.
"""

from enum import Enum
from typing import Optional

# Width breakpoints in pixels
MOBILE_BREAKPOINT = 768
TABLET_BREAKPOINT = 1920

TV_USER_AGENTS = ("Web0S", "webOS", "Tizen", "SmartTV", "BRAVIA")


class DeviceType(Enum):
    """Kinds of display the viewer adapts to."""

    TV = "tv"
    TABLET = "tablet"
    MOBILE = "mobile"

    @property
    def autoplays(self) -> bool:
        """Whether slideshows start on their own after a countdown."""
        return self is DeviceType.TV


def is_tv_user_agent(user_agent: str) -> bool:
    """Check a user agent string against known smart TV platforms."""
    lowered = user_agent.lower()
    return any(marker.lower() in lowered for marker in TV_USER_AGENTS)


def detect_device_type(user_agent: Optional[str], screen_width: int) -> DeviceType:
    """Classify the display from its user agent and width.

    Args:
        user_agent: Client user agent (may be empty)
        screen_width: Screen width in pixels

    Returns:
        TV for a TV user agent or a width of at least 1920, TABLET for a
        width of at least 768, otherwise MOBILE
    """
    if user_agent and is_tv_user_agent(user_agent):
        return DeviceType.TV
    if screen_width >= TABLET_BREAKPOINT:
        return DeviceType.TV
    if screen_width >= MOBILE_BREAKPOINT:
        return DeviceType.TABLET
    return DeviceType.MOBILE


def parse_device_type(value: str) -> DeviceType:
    """Parse a device override such as "tv" or "TABLET".

    Raises:
        ValueError: If the value names no device type
    """
    try:
        return DeviceType(value.strip().lower())
    except ValueError:
        valid = ", ".join(d.value for d in DeviceType)
        raise ValueError(f"Unknown device type: {value} (expected one of {valid})") from None
