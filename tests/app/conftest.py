"""Shared fixtures for app tests."""

from unittest.mock import patch

import pytest
import requests

from photo_stories.admin.config import AdminConfig
from photo_stories.app.config import AppConfig


@pytest.fixture
def app_config(tmp_path, data_dir):
    """Viewer config over the sample data directory."""
    return AppConfig(
        admin_config=AdminConfig(data_dir=data_dir),
        state_dir=tmp_path / "state",
        countdown_seconds=3,
    )


@pytest.fixture
def app_config_path(tmp_path, data_dir, monkeypatch):
    """TOML file for the viewer config."""
    monkeypatch.delenv("PHOTO_STORIES_PIN", raising=False)
    config_path = tmp_path / "app_config.toml"
    config_path.write_text(
        f'[data]\ndir = "{data_dir}"\n\n[app]\nstate_dir = "{tmp_path / "state"}"\n'
    )
    return config_path


@pytest.fixture
def offline():
    """Make photo downloads fail instead of touching the network."""
    with patch("photo_stories.app.services.photo_cache.requests.get") as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("offline")
        yield mock_get
