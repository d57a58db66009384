"""Shared fixtures for Photo Stories tests."""

import json
from pathlib import Path

import pytest

from photo_stories.core.models import Photo, Track


def _make_photos(count: int) -> list[Photo]:
    return [
        Photo(id=f"photo-{i:03d}", url=f"https://example.com/{i}.jpg", caption=f"Photo {i}")
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_photos():
    """Factory for numbered photos."""
    return _make_photos


@pytest.fixture
def sample_trip_data():
    """Trip document in the JSON file format."""
    return {
        "id": "mexico-city-2024",
        "title": "Mexico City",
        "description": "Tacos and museums",
        "coverImage": "https://example.com/1.jpg",
        "createdDate": "2024-03-01",
        "totalDuration": 20,
        "photos": [
            {
                "id": f"photo-00{i}",
                "url": f"https://example.com/{i}.jpg",
                "caption": f"Photo {i}",
                "timestamp": "2024-02-20T10:00:00",
                "type": "photo",
            }
            for i in range(1, 5)
        ],
        "photoTimeline": {},
        "audioTimeline": {"enabled": False, "audioUrl": None, "segments": []},
        "backgroundMusic": {"enabled": False, "volume": 0.3},
    }


@pytest.fixture
def sample_tracks_data():
    """tracks.json document with two tracks."""
    return {
        "tracks": [
            {
                "id": "carefree",
                "title": "Carefree",
                "file": "carefree.mp3",
                "duration": 10,
                "artist": "Kevin MacLeod",
                "mood": "upbeat",
                "license": "CC BY 4.0",
                "sourceUrl": "https://incompetech.com",
            },
            {
                "id": "wallpaper",
                "title": "Wallpaper",
                "file": "wallpaper.mp3",
                "duration": 15,
                "artist": "Kevin MacLeod",
            },
        ]
    }


@pytest.fixture
def tracks(sample_tracks_data) -> list[Track]:
    return [Track.from_dict(t) for t in sample_tracks_data["tracks"]]


@pytest.fixture
def data_dir(tmp_path: Path, sample_trip_data, sample_tracks_data) -> Path:
    """Data directory holding one trip, the trips index, and the track pool."""
    root = tmp_path / "data"
    trips_dir = root / "trips"
    music_dir = root / "audio" / "music"
    trips_dir.mkdir(parents=True)
    music_dir.mkdir(parents=True)

    (trips_dir / "mexico-city-2024.json").write_text(json.dumps(sample_trip_data), encoding="utf-8")
    (root / "trips.json").write_text(
        json.dumps(
            {
                "trips": [
                    {
                        "id": "mexico-city-2024",
                        "title": "Mexico City",
                        "description": "Tacos and museums",
                        "coverImage": "https://example.com/1.jpg",
                        "photoCount": 4,
                        "duration": 20,
                        "hasAudio": False,
                        "createdDate": "2024-03-01",
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    (music_dir / "tracks.json").write_text(json.dumps(sample_tracks_data), encoding="utf-8")
    return root
