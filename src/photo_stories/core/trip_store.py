"""Flat JSON storage for trips and the music library.

Layout under the data directory:

    trips.json              index of all trips (home screen)
    trips/<trip_id>.json    one file per trip
    audio/music/tracks.json music track pool
"""

import json
import logging
from pathlib import Path
from typing import Optional

from photo_stories.core.models import Track, Trip, TripSummary
from photo_stories.core.paths import (
    get_music_dir,
    get_trip_path,
    get_trips_dir,
    get_trips_index_path,
)

logger = logging.getLogger(__name__)


class TripLoadError(Exception):
    """Error reading trip or track data."""


class TripNotFoundError(TripLoadError):
    """Requested trip file does not exist."""

    def __init__(self, trip_id: str):
        super().__init__(f"Trip not found: {trip_id}")
        self.trip_id = trip_id


class TripFormatError(TripLoadError):
    """A trip, index, or tracks file could not be parsed."""


def _read_json(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise TripFormatError(f"Invalid JSON in {path}: {e}") from e


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


class TripStore:
    """Reads and writes trip JSON files.

    Attributes:
        data_dir: Root data directory
        music_dir: Directory holding tracks.json and audio files
    """

    def __init__(self, data_dir: Path, music_dir: Optional[Path] = None):
        """Initialize the store.

        Args:
            data_dir: Root data directory
            music_dir: Music library directory (defaults to data_dir/audio/music)
        """
        self.data_dir = Path(data_dir)
        self.music_dir = Path(music_dir) if music_dir else get_music_dir(self.data_dir)

    @property
    def index_path(self) -> Path:
        """Get the trips index path."""
        return get_trips_index_path(self.data_dir)

    @property
    def tracks_path(self) -> Path:
        """Get the tracks.json path."""
        return self.music_dir / "tracks.json"

    def list_trips(self) -> list[TripSummary]:
        """List trips from the index.

        Returns:
            Trip summaries in index order (empty if there is no index)
        """
        if not self.index_path.exists():
            logger.debug(f"No trips index at {self.index_path}")
            return []

        data = _read_json(self.index_path)
        return [TripSummary.from_dict(entry) for entry in data.get("trips", [])]

    def list_trip_ids(self) -> list[str]:
        """List the IDs of all trip files on disk."""
        trips_dir = get_trips_dir(self.data_dir)
        if not trips_dir.exists():
            return []
        return sorted(p.stem for p in trips_dir.glob("*.json"))

    def load_trip(self, trip_id: str) -> Trip:
        """Load a trip file.

        Args:
            trip_id: Trip identifier

        Returns:
            Trip instance

        Raises:
            TripNotFoundError: If the trip file does not exist
            TripFormatError: If the trip file is malformed
        """
        path = get_trip_path(self.data_dir, trip_id)
        if not path.exists():
            raise TripNotFoundError(trip_id)

        data = _read_json(path)
        try:
            trip = Trip.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TripFormatError(f"Malformed trip file {path}: {e}") from e

        logger.info(f"Loaded trip {trip.id}: {trip.photo_count} photos, {trip.total_duration}s")
        return trip

    def save_trip(self, trip: Trip) -> Path:
        """Write a trip file.

        Args:
            trip: Trip to save

        Returns:
            Path of the written file
        """
        path = get_trip_path(self.data_dir, trip.id)
        _write_json(path, trip.to_dict())
        logger.info(f"Saved trip data: {path}")
        return path

    def update_index(self, trip: Trip) -> Path:
        """Insert or replace a trip's entry in the index.

        An existing entry with the same ID is removed and the new entry is
        appended at the end.

        Args:
            trip: Trip whose summary should be indexed

        Returns:
            Path of the written index
        """
        index = {"trips": []}
        if self.index_path.exists():
            index = _read_json(self.index_path)

        trips = [entry for entry in index.get("trips", []) if entry.get("id") != trip.id]
        trips.append(trip.summary().to_dict())
        index["trips"] = trips

        _write_json(self.index_path, index)
        logger.info(f"Updated trips index: {self.index_path}")
        return self.index_path

    def load_tracks(self) -> list[Track]:
        """Load the music track pool.

        Returns:
            Tracks from tracks.json (empty if the file is missing)
        """
        if not self.tracks_path.exists():
            logger.warning(f"No tracks.json at {self.tracks_path}, music disabled")
            return []

        data = _read_json(self.tracks_path)
        try:
            return [Track.from_dict(entry) for entry in data.get("tracks", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise TripFormatError(f"Malformed tracks file {self.tracks_path}: {e}") from e

    def get_track(self, track_id: str) -> Optional[Track]:
        """Find a track by ID."""
        for track in self.load_tracks():
            if track.id == track_id:
                return track
        return None

    def track_path(self, track: Track) -> Path:
        """Get the audio file path for a track."""
        return self.music_dir / track.file
