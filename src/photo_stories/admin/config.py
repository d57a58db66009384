"""Configuration management for photo-stories-admin CLI.

Handles loading, saving, and validating TOML configuration stored in:
- macOS: ~/.config/photo-stories/config.toml
- Linux: ~/.config/photo-stories/config.toml (XDG_CONFIG_HOME)
- Windows: %APPDATA%\\photo-stories\\config.toml
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w

from photo_stories.core.paths import get_music_dir, get_user_data_dir


@dataclass
class AdminConfig:
    """Configuration for photo-stories-admin CLI.

    Attributes:
        data_dir: Directory holding trips.json and trips/
        music_dir: Directory holding tracks.json and audio files
        flickr_api_base: Flickr REST endpoint
        default_photo_duration: Seconds per photo for imported trips
        default_music_volume: Volume written into trip music settings
        default_track_id: Track ID written into new trips
    """

    # Local data
    data_dir: Path = field(default_factory=lambda: get_user_data_dir())
    music_dir: Optional[Path] = None

    # Flickr
    flickr_api_base: str = "https://api.flickr.com/services/rest/"

    # Import defaults
    default_photo_duration: int = 5
    default_music_volume: float = 0.3
    default_track_id: str = "ambient-travel-1"

    def __post_init__(self):
        """Derive the music directory from the data directory."""
        if self.music_dir is None:
            self.music_dir = get_music_dir(self.data_dir)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AdminConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            AdminConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        if "data" in data:
            data_section = data["data"]
            if data_section.get("dir"):
                config.data_dir = Path(data_section["dir"])
                config.music_dir = get_music_dir(config.data_dir)
            if data_section.get("music_dir"):
                config.music_dir = Path(data_section["music_dir"])

        # Environment variable takes precedence over the file
        env_data_dir = os.environ.get("PHOTO_STORIES_DATA_DIR")
        if env_data_dir:
            config.data_dir = Path(env_data_dir)
            if not data.get("data", {}).get("music_dir"):
                config.music_dir = get_music_dir(config.data_dir)

        if "flickr" in data:
            config.flickr_api_base = data["flickr"].get("api_base", config.flickr_api_base)

        if "import" in data:
            defaults = data["import"]
            config.default_photo_duration = defaults.get(
                "photo_duration", config.default_photo_duration
            )
            config.default_music_volume = defaults.get("music_volume", config.default_music_volume)
            config.default_track_id = defaults.get("track_id", config.default_track_id)

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "data": {"dir": str(self.data_dir), "music_dir": str(self.music_dir)},
            "flickr": {"api_base": self.flickr_api_base},
            "import": {
                "photo_duration": self.default_photo_duration,
                "music_volume": self.default_music_volume,
                "track_id": self.default_track_id,
            },
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a configuration value by key.

        Args:
            key: Configuration attribute name (e.g., "data_dir")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        parts = key.split(".")
        value = self

        for part in parts:
            if hasattr(value, part):
                value = getattr(value, part)
            else:
                return default

        if isinstance(value, Path):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        """Set a configuration value by key.

        Args:
            key: Configuration attribute name
            value: Configuration value as text

        Raises:
            ValueError: If the key does not exist
        """
        parts = key.split(".")
        target = self

        for part in parts[:-1]:
            if hasattr(target, part):
                target = getattr(target, part)
            else:
                raise ValueError(f"Invalid config key: {key}")

        final_key = parts[-1]
        if not hasattr(target, final_key):
            raise ValueError(f"Invalid config key: {key}")

        # Try to preserve type
        current = getattr(target, final_key)
        if isinstance(current, bool):
            new_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            new_value = int(value)
        elif isinstance(current, float):
            new_value = float(value)
        elif isinstance(current, Path):
            new_value = Path(value)
        else:
            new_value = value

        setattr(target, final_key, new_value)


def get_config_dir() -> Path:
    """Get the platform-specific config directory.

    Returns:
        Path to the config directory for photo-stories.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "photo-stories"
        return Path.home() / ".config" / "photo-stories"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "photo-stories"
        return Path.home() / "AppData" / "Roaming" / "photo-stories"
    else:
        return Path.home() / ".config" / "photo-stories"


def get_config_path() -> Path:
    """Get the path to the config.toml file.

    Returns:
        Path to config.toml
    """
    return get_config_dir() / "config.toml"


def ensure_config_exists() -> AdminConfig:
    """Ensure config file exists, creating default if needed.

    Returns:
        AdminConfig instance
    """
    config_path = get_config_path()

    if config_path.exists():
        try:
            return AdminConfig.load(config_path)
        except (OSError, tomllib.TOMLDecodeError):
            # If config is corrupted, create a new one
            pass

    config = AdminConfig()
    config.save(config_path)
    return config


def get_secret(key: str) -> Optional[str]:
    """Get a secret value from environment variable.

    Args:
        key: Secret key (e.g., "flickr.api_key" reads FLICKR_API_KEY)

    Returns:
        Secret value or None
    """
    return os.environ.get(key.upper().replace(".", "_"))
