"""Background music playlist generation.

Builds a shuffled playlist that covers the whole slideshow without
repeating a track until the entire pool has been played, and resolves
which track is active at a given playback time.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from photo_stories.core.models import Track
from photo_stories.core.timeline import validate_duration


@dataclass(frozen=True)
class CurrentTrack:
    """Track active at a playback time.

    Attributes:
        track: The active track
        track_index: Position of the track in the playlist
        track_start_time: Playlist time at which the track starts
        track_elapsed_time: Seconds into the track
    """

    track: Track
    track_index: int
    track_start_time: float
    track_elapsed_time: float


def shuffle_tracks(tracks: Sequence[Track], rng: Optional[random.Random] = None) -> list[Track]:
    """Shuffle a copy of the track pool using Fisher-Yates.

    Args:
        tracks: Track pool
        rng: Random source (defaults to a fresh unseeded generator)

    Returns:
        New list holding a uniform random permutation of the pool
    """
    if rng is None:
        rng = random.Random()
    shuffled = list(tracks)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_playlist(
    tracks: Sequence[Track],
    total_duration: float,
    rng: Optional[random.Random] = None,
) -> list[Track]:
    """Generate a playlist covering the whole slideshow duration.

    The pool is shuffled once. That order is repeated for every complete
    cycle that fits in total_duration, then walked again until the
    remaining time is covered (the crossing track included).

    Args:
        tracks: All available tracks
        total_duration: Slideshow duration in seconds
        rng: Random source for the shuffle

    Returns:
        Tracks in play order; empty only if the pool is empty

    Raises:
        InvalidDurationError: If total_duration is negative
    """
    validate_duration(total_duration)

    if not tracks:
        return []

    shuffled = shuffle_tracks(tracks, rng)
    cycle_duration = sum(track.duration for track in shuffled)

    playlist: list[Track] = []

    if cycle_duration > 0:
        complete_cycles = math.floor(total_duration / cycle_duration)
        remaining_time = total_duration - complete_cycles * cycle_duration

        for _ in range(complete_cycles):
            playlist.extend(shuffled)

        accumulated = 0.0
        for track in shuffled:
            if accumulated >= remaining_time:
                break
            playlist.append(track)
            accumulated += track.duration

    if not playlist:
        playlist.append(shuffled[0])

    return playlist


def playlist_duration(playlist: Sequence[Track]) -> float:
    """Get the total duration of a playlist in seconds."""
    return sum(track.duration for track in playlist)


def get_current_track(playlist: Sequence[Track], current_time: float) -> Optional[CurrentTrack]:
    """Get the track that should be playing at a playback time.

    Args:
        playlist: Tracks in play order
        current_time: Playback time in seconds

    Returns:
        CurrentTrack for the active track, or None for an empty playlist.
        Past the end of the playlist the last track is reported as fully
        elapsed.
    """
    if not playlist:
        return None

    accumulated = 0.0

    for i, track in enumerate(playlist):
        track_end = accumulated + track.duration
        if accumulated <= current_time < track_end:
            return CurrentTrack(
                track=track,
                track_index=i,
                track_start_time=accumulated,
                track_elapsed_time=current_time - accumulated,
            )
        accumulated = track_end

    last_track = playlist[-1]
    return CurrentTrack(
        track=last_track,
        track_index=len(playlist) - 1,
        track_start_time=accumulated - last_track.duration,
        track_elapsed_time=last_track.duration,
    )
