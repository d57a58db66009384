"""Viewer screen modules."""

from photo_stories.app.screens.home import HomeScreen
from photo_stories.app.screens.pin_auth import PinAuthScreen
from photo_stories.app.screens.slideshow import SlideshowScreen

__all__ = [
    "HomeScreen",
    "PinAuthScreen",
    "SlideshowScreen",
]
