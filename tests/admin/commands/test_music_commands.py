"""Tests for music CLI commands."""

from typer.testing import CliRunner

from photo_stories.admin.main import app
from photo_stories.core.trip_store import TripStore

runner = CliRunner()


class TestMusicTracksCommand:
    def test_lists_tracks(self, admin_config_path):
        result = runner.invoke(app, ["music", "tracks", "--config", str(admin_config_path)])

        assert result.exit_code == 0, result.output
        assert "carefree" in result.output
        assert "0:15" in result.output

    def test_no_tracks(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PHOTO_STORIES_DATA_DIR", raising=False)
        config_path = tmp_path / "config.toml"
        config_path.write_text(f'[data]\ndir = "{tmp_path / "empty"}"\n')

        result = runner.invoke(app, ["music", "tracks", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "No tracks found" in result.output


class TestMusicSetCommand:
    """Tests for 'music set' command."""

    def test_set_music(self, admin_config_path, data_dir):
        result = runner.invoke(
            app,
            ["music", "set", "mexico-city-2024", "wallpaper", "--volume", "0.6", "--config", str(admin_config_path)],
        )

        assert result.exit_code == 0, result.output
        assert "Updated mexico-city-2024" in result.output
        # Audio files are not part of the sample data
        assert "Music file missing" in result.output

        music = TripStore(data_dir).load_trip("mexico-city-2024").background_music
        assert music.enabled
        assert music.track_id == "wallpaper"
        assert music.volume == 0.6

    def test_set_disabled(self, admin_config_path, data_dir):
        result = runner.invoke(
            app,
            ["music", "set", "mexico-city-2024", "carefree", "--disabled", "--config", str(admin_config_path)],
        )

        assert result.exit_code == 0, result.output
        assert not TripStore(data_dir).load_trip("mexico-city-2024").background_music.enabled

    def test_unknown_track(self, admin_config_path):
        result = runner.invoke(
            app, ["music", "set", "mexico-city-2024", "polka", "--config", str(admin_config_path)]
        )

        assert result.exit_code == 1
        assert "Track not found: polka" in result.output
        assert "Available Tracks" in result.output

    def test_unknown_trip(self, admin_config_path):
        result = runner.invoke(app, ["music", "set", "atlantis", "carefree", "--config", str(admin_config_path)])

        assert result.exit_code == 1
        assert "atlantis" in result.output


class TestMusicEnableAllCommand:
    def test_enable_all(self, admin_config_path, data_dir):
        result = runner.invoke(app, ["music", "enable-all", "--config", str(admin_config_path)])

        assert result.exit_code == 0, result.output
        assert "mexico-city-2024 - Music enabled" in result.output
        assert "Updated: 1" in result.output
        assert TripStore(data_dir).load_trip("mexico-city-2024").background_music.enabled

    def test_enable_all_is_idempotent(self, admin_config_path):
        runner.invoke(app, ["music", "enable-all", "--config", str(admin_config_path)])

        result = runner.invoke(app, ["music", "enable-all", "--config", str(admin_config_path)])

        assert "Already has music enabled" in result.output
        assert "Updated: 0" in result.output
