"""Fixtures for photo-stories-admin tests."""

import pytest


@pytest.fixture
def admin_config_path(tmp_path, data_dir, monkeypatch):
    """Config file pointing at the sample data directory."""
    monkeypatch.delenv("PHOTO_STORIES_DATA_DIR", raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'[data]\ndir = "{data_dir}"\n\n[import]\nphoto_duration = 4\n')
    return config_path
