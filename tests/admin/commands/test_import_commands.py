"""Tests for import CLI commands."""

from unittest.mock import Mock, patch

from typer.testing import CliRunner

from photo_stories.admin.main import app
from photo_stories.core.trip_store import TripStore

runner = CliRunner()

GUEST_PASS_PAGE = """
<html><body>
  <img src="//live.staticflickr.com/65535/111_aaa_z.jpg" alt="Zocalo">
  <img src="//live.staticflickr.com/65535/222_bbb_z.jpg" alt="Coyoacan">
  <a href="/gp/traveler/XYZ/page2" class="pagination-next disabled">Next</a>
</body></html>
"""


def make_response(text="", json_data=None):
    response = Mock()
    response.text = text
    response.json.return_value = json_data
    response.raise_for_status = Mock()
    return response


class TestImportScrapeCommand:
    """Tests for 'import scrape' command."""

    def test_missing_config(self, tmp_path):
        result = runner.invoke(
            app,
            ["import", "scrape", "https://www.flickr.com/gp/a/b", "kyoto", "--config", str(tmp_path / "nope.toml")],
        )

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_scrape_saves_trip(self, mock_get, admin_config_path, data_dir):
        mock_get.return_value = make_response(GUEST_PASS_PAGE)

        result = runner.invoke(
            app,
            [
                "import",
                "scrape",
                "https://www.flickr.com/gp/traveler/XYZ",
                "kyoto",
                "--title",
                "Kyoto",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Found 2 items" in result.output
        assert "Import complete" in result.output

        store = TripStore(data_dir)
        trip = store.load_trip("kyoto")
        assert trip.title == "Kyoto"
        assert trip.total_duration == 8.0
        assert [p.caption for p in trip.photos] == ["Zocalo", "Coyoacan"]
        assert "kyoto" in [t.id for t in store.list_trips()]

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_dry_run_does_not_save(self, mock_get, admin_config_path, data_dir):
        mock_get.return_value = make_response(GUEST_PASS_PAGE)

        result = runner.invoke(
            app,
            [
                "import",
                "scrape",
                "https://www.flickr.com/gp/traveler/XYZ",
                "kyoto",
                "--dry-run",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Dry run" in result.output
        assert not (data_dir / "trips" / "kyoto.json").exists()

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_empty_album(self, mock_get, admin_config_path):
        mock_get.return_value = make_response("<html><body></body></html>")

        result = runner.invoke(
            app,
            ["import", "scrape", "https://www.flickr.com/gp/traveler/XYZ", "kyoto", "--config", str(admin_config_path)],
        )

        assert result.exit_code == 1
        assert "No photos found" in result.output


class TestImportFlickrCommand:
    """Tests for 'import flickr' command."""

    def test_invalid_url(self, admin_config_path, monkeypatch):
        monkeypatch.setenv("FLICKR_API_KEY", "key")

        result = runner.invoke(
            app,
            ["import", "flickr", "https://example.com/album", "kyoto", "--config", str(admin_config_path)],
        )

        assert result.exit_code == 1
        assert "Could not parse Flickr album URL" in result.output

    def test_missing_api_key(self, admin_config_path, monkeypatch):
        monkeypatch.delenv("FLICKR_API_KEY", raising=False)

        result = runner.invoke(
            app,
            [
                "import",
                "flickr",
                "https://www.flickr.com/photos/traveler/albums/123",
                "kyoto",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 1
        assert "FLICKR_API_KEY" in result.output

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_import_public_album(self, mock_get, admin_config_path, data_dir, monkeypatch):
        monkeypatch.setenv("FLICKR_API_KEY", "key")
        monkeypatch.setenv("FLICKR_API_SECRET", "secret")
        mock_get.return_value = make_response(
            json_data={
                "stat": "ok",
                "photoset": {
                    "photo": [
                        {"id": "1", "title": "Tower", "secret": "a", "server": "9", "url_k": "https://x/1_k.jpg"},
                    ]
                },
            }
        )

        result = runner.invoke(
            app,
            [
                "import",
                "flickr",
                "https://www.flickr.com/photos/12345@N01/albums/123",
                "paris",
                "--duration",
                "6",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Found 1 photos" in result.output
        trip = TripStore(data_dir).load_trip("paris")
        assert trip.photos[0].url == "https://x/1_k.jpg"
        assert trip.total_duration == 6.0

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_api_failure(self, mock_get, admin_config_path, monkeypatch):
        monkeypatch.setenv("FLICKR_API_KEY", "key")
        mock_get.return_value = make_response(json_data={"stat": "fail", "message": "Invalid API Key"})

        result = runner.invoke(
            app,
            [
                "import",
                "flickr",
                "https://www.flickr.com/photos/12345@N01/albums/123",
                "paris",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 1
        assert "Invalid API Key" in result.output

    @patch("photo_stories.admin.services.flickr.requests.get")
    def test_non_json_response(self, mock_get, admin_config_path, monkeypatch):
        monkeypatch.setenv("FLICKR_API_KEY", "key")
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        result = runner.invoke(
            app,
            [
                "import",
                "flickr",
                "https://www.flickr.com/photos/12345@N01/albums/123",
                "paris",
                "--config",
                str(admin_config_path),
            ],
        )

        assert result.exit_code == 1
        assert "invalid JSON" in result.output
