"""Configuration management for the photo-stories viewer.

Extends AdminConfig with viewer settings for authentication, slideshow
timing, and playback preferences.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w

from photo_stories.admin.config import AdminConfig
from photo_stories.core.paths import ensure_directories


def get_app_config_dir() -> Path:
    """Get the platform-specific config directory for the viewer.

    Returns:
        Path to the config directory for photo-stories.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "photo-stories-app"
        return Path.home() / ".config" / "photo-stories-app"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "photo-stories-app"
        return Path.home() / "AppData" / "Roaming" / "photo-stories-app"
    else:
        return Path.home() / ".config" / "photo-stories-app"


def get_app_config_path() -> Path:
    """Get the path to the app config.toml file.

    Returns:
        Path to config.toml
    """
    return get_app_config_dir() / "config.toml"


@dataclass
class AppConfig:
    """Configuration for the photo-stories viewer.

    Attributes:
        admin_config: Base admin configuration (shared data directories)
        state_dir: Directory for the auth session file and logs
        pin: Viewer PIN (PHOTO_STORIES_PIN overrides the file)
        auth_expiry_days: Days before the PIN must be entered again
        countdown_seconds: Auto-play countdown length on TVs
        controls_hide_delay_ms: Idle time before the controls overlay hides
        preload_count: Number of upcoming photos to prefetch
        music_volume: Default background music volume
        device: Forced device type ("tv", "tablet", "mobile"), None = detect
    """

    # Base admin config (embedded)
    admin_config: AdminConfig = field(default_factory=AdminConfig)

    state_dir: Path = field(default_factory=lambda: get_app_config_dir() / "state")

    # Authentication
    pin: str = "123456"
    auth_expiry_days: int = 30

    # Slideshow settings
    countdown_seconds: int = 5
    controls_hide_delay_ms: int = 3000
    preload_count: int = 20

    # Audio settings
    music_volume: float = 0.3

    device: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            AppConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_app_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        admin_config = AdminConfig()
        if "data" in data:
            data_section = data["data"]
            if data_section.get("dir"):
                admin_config.data_dir = Path(data_section["dir"])
                admin_config.music_dir = admin_config.data_dir / "audio" / "music"
            if data_section.get("music_dir"):
                admin_config.music_dir = Path(data_section["music_dir"])

        config = cls(admin_config=admin_config)

        if "app" in data:
            app_data = data["app"]
            if "state_dir" in app_data:
                config.state_dir = Path(app_data["state_dir"])
            config.pin = str(app_data.get("pin", config.pin))
            config.auth_expiry_days = app_data.get("auth_expiry_days", config.auth_expiry_days)
            config.countdown_seconds = app_data.get("countdown_seconds", config.countdown_seconds)
            config.controls_hide_delay_ms = app_data.get(
                "controls_hide_delay_ms", config.controls_hide_delay_ms
            )
            config.preload_count = app_data.get("preload_count", config.preload_count)
            config.music_volume = app_data.get("music_volume", config.music_volume)
            config.device = app_data.get("device") or None

        env_pin = os.environ.get("PHOTO_STORIES_PIN")
        if env_pin:
            config.pin = env_pin

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_app_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        app_data = {
            "state_dir": str(self.state_dir),
            "pin": self.pin,
            "auth_expiry_days": self.auth_expiry_days,
            "countdown_seconds": self.countdown_seconds,
            "controls_hide_delay_ms": self.controls_hide_delay_ms,
            "preload_count": self.preload_count,
            "music_volume": self.music_volume,
        }
        if self.device:
            app_data["device"] = self.device

        data = {
            "data": {
                "dir": str(self.admin_config.data_dir),
                "music_dir": str(self.admin_config.music_dir),
            },
            "app": app_data,
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def ensure_directories(self) -> None:
        """Ensure all configured directories exist."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        ensure_directories(self.data_dir)

    @property
    def data_dir(self) -> Path:
        """Get the data directory from admin config."""
        return self.admin_config.data_dir

    @property
    def music_dir(self) -> Path:
        """Get the music directory from admin config."""
        return self.admin_config.music_dir

    @property
    def log_dir(self) -> Path:
        """Get the session log directory."""
        return self.state_dir / "logs"

    @property
    def auth_path(self) -> Path:
        """Get the persisted auth session path."""
        return self.state_dir / "auth.json"

    @property
    def cache_dir(self) -> Path:
        """Get the photo cache directory."""
        return self.state_dir / "cache"


def ensure_app_config_exists() -> AppConfig:
    """Ensure config file exists, creating default if needed.

    Returns:
        AppConfig instance
    """
    config_path = get_app_config_path()

    if config_path.exists():
        try:
            return AppConfig.load(config_path)
        except (OSError, tomllib.TOMLDecodeError):
            # If config is corrupted, create a new one
            pass

    config = AppConfig()
    config.save(config_path)
    return config
