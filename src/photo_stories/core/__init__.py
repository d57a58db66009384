"""Core scheduling utilities for Photo Stories."""

from photo_stories.core.models import BackgroundMusic, Photo, PhotoWindow, Track, Trip, TripSummary
from photo_stories.core.paths import get_user_data_dir, get_music_dir, ensure_directories
from photo_stories.core.playlist import CurrentTrack, generate_playlist, get_current_track
from photo_stories.core.timeline import (
    InvalidDurationError,
    calculate_photo_timeline,
    get_current_photo_index,
    get_photo_start_time,
)

__all__ = [
    "BackgroundMusic",
    "CurrentTrack",
    "InvalidDurationError",
    "Photo",
    "PhotoWindow",
    "Track",
    "Trip",
    "TripSummary",
    "calculate_photo_timeline",
    "ensure_directories",
    "generate_playlist",
    "get_current_photo_index",
    "get_current_track",
    "get_music_dir",
    "get_photo_start_time",
    "get_user_data_dir",
]
