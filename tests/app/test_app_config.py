"""Tests for viewer configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from photo_stories.app.config import AppConfig, ensure_app_config_exists, get_app_config_dir


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.pin == "123456"
        assert config.auth_expiry_days == 30
        assert config.countdown_seconds == 5
        assert config.controls_hide_delay_ms == 3000
        assert config.preload_count == 20
        assert config.device is None

    def test_derived_paths(self, tmp_path):
        config = AppConfig(state_dir=tmp_path)

        assert config.log_dir == tmp_path / "logs"
        assert config.auth_path == tmp_path / "auth.json"
        assert config.cache_dir == tmp_path / "cache"

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load(tmp_path / "missing.toml")

    def test_load_sections(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PHOTO_STORIES_PIN", raising=False)
        config_path = tmp_path / "config.toml"
        config_path.write_text(
            '[data]\ndir = "/srv/stories"\n\n'
            '[app]\npin = 424242\ncountdown_seconds = 3\ndevice = "tv"\n'
        )

        config = AppConfig.load(config_path)

        assert config.data_dir == Path("/srv/stories")
        assert config.music_dir == Path("/srv/stories/audio/music")
        assert config.pin == "424242"
        assert config.countdown_seconds == 3
        assert config.device == "tv"

    def test_env_pin_override(self, tmp_path, monkeypatch):
        config_path = tmp_path / "config.toml"
        config_path.write_text('[app]\npin = "111111"\n')
        monkeypatch.setenv("PHOTO_STORIES_PIN", "999999")

        assert AppConfig.load(config_path).pin == "999999"

    def test_save_and_load(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PHOTO_STORIES_PIN", raising=False)
        config_path = tmp_path / "config.toml"
        config = AppConfig(state_dir=tmp_path / "state", pin="777777", preload_count=5)
        config.admin_config.data_dir = tmp_path / "data"
        config.admin_config.music_dir = tmp_path / "music"

        config.save(config_path)
        loaded = AppConfig.load(config_path)

        assert loaded.state_dir == tmp_path / "state"
        assert loaded.data_dir == tmp_path / "data"
        assert loaded.music_dir == tmp_path / "music"
        assert loaded.pin == "777777"
        assert loaded.preload_count == 5

    def test_ensure_directories(self, tmp_path):
        config = AppConfig(state_dir=tmp_path / "state")
        config.admin_config.data_dir = tmp_path / "data"

        config.ensure_directories()

        assert (tmp_path / "state").is_dir()
        assert (tmp_path / "data").is_dir()


class TestAppConfigHelpers:
    def test_config_dir_honours_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_app_config_dir() == tmp_path / "photo-stories-app"

    def test_ensure_app_config_exists(self, tmp_path):
        config_path = tmp_path / "config.toml"
        with patch("photo_stories.app.config.get_app_config_path", return_value=config_path):
            ensure_app_config_exists()

        assert config_path.exists()
