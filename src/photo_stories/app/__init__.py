"""Photo Stories viewer (TUI).

PIN-gated Textual application that plays trip photo collections as a
timed slideshow with shuffled background music.
"""

__version__ = "0.1.0"
