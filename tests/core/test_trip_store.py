"""Tests for trip JSON storage."""

import json

import pytest

from photo_stories.core.models import Trip
from photo_stories.core.paths import ensure_directories, get_trip_path, get_user_data_dir
from photo_stories.core.trip_store import (
    TripFormatError,
    TripLoadError,
    TripNotFoundError,
    TripStore,
)


class TestTripStore:
    """Tests for TripStore."""

    @pytest.fixture
    def store(self, data_dir):
        return TripStore(data_dir)

    def test_music_dir_default(self, data_dir):
        store = TripStore(data_dir)

        assert store.music_dir == data_dir / "audio" / "music"

    def test_list_trips(self, store):
        trips = store.list_trips()

        assert len(trips) == 1
        assert trips[0].id == "mexico-city-2024"
        assert trips[0].photo_count == 4

    def test_list_trips_without_index(self, tmp_path):
        assert TripStore(tmp_path).list_trips() == []

    def test_list_trip_ids(self, store):
        assert store.list_trip_ids() == ["mexico-city-2024"]

    def test_load_trip(self, store):
        trip = store.load_trip("mexico-city-2024")

        assert trip.title == "Mexico City"
        assert len(trip.photos) == 4

    def test_load_missing_trip(self, store):
        with pytest.raises(TripNotFoundError) as exc_info:
            store.load_trip("atlantis")

        assert exc_info.value.trip_id == "atlantis"
        assert isinstance(exc_info.value, TripLoadError)

    def test_load_invalid_json(self, store, data_dir):
        get_trip_path(data_dir, "broken").write_text("{not json", encoding="utf-8")

        with pytest.raises(TripFormatError):
            store.load_trip("broken")

    def test_load_trip_without_id(self, store, data_dir):
        get_trip_path(data_dir, "noid").write_text(json.dumps({"title": "x"}), encoding="utf-8")

        with pytest.raises(TripFormatError):
            store.load_trip("noid")

    def test_save_and_load(self, tmp_path):
        store = TripStore(tmp_path)
        trip = Trip(id="kyoto", title="Kyoto", total_duration=10)

        path = store.save_trip(trip)

        assert path == tmp_path / "trips" / "kyoto.json"
        assert store.load_trip("kyoto") == trip

    def test_update_index_replaces_existing_entry(self, store):
        trip = store.load_trip("mexico-city-2024")
        trip.title = "CDMX"

        store.update_index(trip)
        store.update_index(Trip(id="kyoto", title="Kyoto"))

        trips = store.list_trips()
        assert [t.id for t in trips] == ["mexico-city-2024", "kyoto"]
        assert trips[0].title == "CDMX"

    def test_update_index_moves_entry_to_end(self, store):
        store.update_index(Trip(id="kyoto", title="Kyoto"))
        store.update_index(store.load_trip("mexico-city-2024"))

        assert [t.id for t in store.list_trips()] == ["kyoto", "mexico-city-2024"]

    def test_load_tracks(self, store):
        tracks = store.load_tracks()

        assert [t.id for t in tracks] == ["carefree", "wallpaper"]
        assert tracks[1].duration == 15.0

    def test_load_tracks_missing_file(self, tmp_path):
        assert TripStore(tmp_path).load_tracks() == []

    def test_get_track(self, store):
        assert store.get_track("wallpaper").title == "Wallpaper"
        assert store.get_track("nope") is None

    def test_track_path(self, store, data_dir):
        track = store.get_track("carefree")

        assert store.track_path(track) == data_dir / "audio" / "music" / "carefree.mp3"


class TestPaths:
    def test_data_dir_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PHOTO_STORIES_DATA_DIR", str(tmp_path))

        assert get_user_data_dir() == tmp_path

    def test_ensure_directories(self, tmp_path):
        ensure_directories(tmp_path / "data")

        assert (tmp_path / "data" / "trips").is_dir()
        assert (tmp_path / "data" / "audio" / "music").is_dir()
