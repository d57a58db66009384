"""Photo Stories admin CLI.

Offline tools for importing Flickr albums into trip files and managing
trip background music.
"""

__version__ = "0.1.0"
