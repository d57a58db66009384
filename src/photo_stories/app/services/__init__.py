"""Services for the photo-stories viewer."""

from photo_stories.app.services.music import MusicPlayer
from photo_stories.app.services.photo_cache import PhotoCache
from photo_stories.app.services.slideshow import PlaybackPhase, SlideshowSession

__all__ = [
    "MusicPlayer",
    "PhotoCache",
    "PlaybackPhase",
    "SlideshowSession",
]
