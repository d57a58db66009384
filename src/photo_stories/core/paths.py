"""Platform-specific path resolution for Photo Stories.

This module handles cross-platform path conventions for storing trip data
and the music library.

Supported Platforms:
- macOS: ~/Library/Application Support/PhotoStories/
- Linux: ~/.local/share/photo_stories/ (XDG_DATA_HOME)
- Windows: %APPDATA%\\PhotoStories\\
"""

import os
import sys
from pathlib import Path


def get_user_data_dir() -> Path:
    """Get the platform-specific user data directory.

    Returns:
        Path to the user data directory for Photo Stories.

    Examples:
        >>> get_user_data_dir()  # doctest: +SKIP
        Path('/home/user/.local/share/photo_stories')  # Linux
        Path('/Users/user/Library/Application Support/PhotoStories')  # macOS
    """
    # Check for environment variable override first
    if "PHOTO_STORIES_DATA_DIR" in os.environ:
        return Path(os.environ["PHOTO_STORIES_DATA_DIR"])

    if sys.platform == "darwin":
        path = Path.home() / "Library" / "Application Support" / "PhotoStories"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA", "")
        if not appdata:
            path = Path.home() / "AppData" / "Roaming" / "PhotoStories"
        else:
            path = Path(appdata) / "PhotoStories"
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        if xdg_data_home:
            path = Path(xdg_data_home) / "photo_stories"
        else:
            path = Path.home() / ".local" / "share" / "photo_stories"

    return path


def get_trips_dir(data_dir: Path) -> Path:
    """Get the directory holding one JSON file per trip.

    Args:
        data_dir: Root data directory

    Returns:
        Path to the trips directory.
    """
    return data_dir / "trips"


def get_trips_index_path(data_dir: Path) -> Path:
    """Get the path to the trips index JSON file.

    Args:
        data_dir: Root data directory

    Returns:
        Path to trips.json.
    """
    return data_dir / "trips.json"


def get_trip_path(data_dir: Path, trip_id: str) -> Path:
    """Get the path to a specific trip file.

    Args:
        data_dir: Root data directory
        trip_id: The trip identifier (e.g., "mexico-city-2024")

    Returns:
        Path to the trip's JSON file.
    """
    return get_trips_dir(data_dir) / f"{trip_id}.json"


def get_music_dir(data_dir: Path) -> Path:
    """Get the default music library directory.

    Args:
        data_dir: Root data directory

    Returns:
        Path to the directory holding tracks.json and the audio files.
    """
    return data_dir / "audio" / "music"


def ensure_directories(data_dir: Path) -> None:
    """Ensure the data directory layout exists.

    Safe to call multiple times; only missing directories are created.

    Args:
        data_dir: Root data directory
    """
    for directory in (data_dir, get_trips_dir(data_dir), get_music_dir(data_dir)):
        directory.mkdir(parents=True, exist_ok=True)
