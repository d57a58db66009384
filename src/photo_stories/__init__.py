"""Photo Stories - A PIN-gated photo/video slideshow viewer.

This package provides tools for:
- Scheduling trip photos and background music on a playback clock
- Playing trip slideshows in a terminal viewer
- Importing Flickr albums into JSON trip files
"""

__version__ = "0.1.0"
