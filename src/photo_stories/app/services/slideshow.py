"""Slideshow playback session.

Drives a trip's playback clock on a fixed 100 ms tick and answers which
photo and which music track belong to the current time. The session is
pure state: the slideshow screen owns the timers and calls into it.
"""

import random
from enum import Enum
from typing import Optional, Sequence

from photo_stories.app.device import DeviceType
from photo_stories.app.logging_config import get_logger
from photo_stories.core.models import BackgroundMusic, Photo, Track, Trip
from photo_stories.core.playlist import CurrentTrack, generate_playlist, get_current_track
from photo_stories.core.timeline import (
    format_time,
    get_current_photo_index,
    get_photo_start_time,
    resolve_timeline,
    validate_duration,
)

logger = get_logger(__name__)

TICK_SECONDS = 0.1
DEFAULT_COUNTDOWN_SECONDS = 5
DEFAULT_MUSIC_VOLUME = 0.3


class PlaybackPhase(Enum):
    """Playback phases of a slideshow session."""

    IDLE = "idle"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    PAUSED = "paused"


def select_music_pool(music: BackgroundMusic, tracks: Sequence[Track]) -> list[Track]:
    """Pick the tracks a trip's playlist is drawn from.

    Args:
        music: The trip's background music settings
        tracks: Full track pool

    Returns:
        Empty if music is disabled; the single preferred track if the trip
        names one that exists; otherwise the whole pool
    """
    if not music.enabled:
        return []

    if music.track_id:
        for track in tracks:
            if track.id == music.track_id:
                return [track]
        logger.warning(f"Track {music.track_id} not in pool, shuffling all tracks")

    return list(tracks)


class SlideshowSession:
    """Playback state for one trip.

    Lifecycle: IDLE -> COUNTDOWN (TV only) -> PLAYING <-> PAUSED -> IDLE.

    Attributes:
        trip: Trip being played
        device_type: Display kind, decides whether playback auto-starts
        timeline: Photo ID to time window mapping
        playlist: Background music tracks in play order
        phase: Current playback phase
        current_time: Playback clock in seconds
        countdown_remaining: Seconds left on the auto-play countdown
    """

    def __init__(
        self,
        trip: Trip,
        tracks: Sequence[Track] = (),
        device_type: DeviceType = DeviceType.TABLET,
        countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS,
        default_volume: float = DEFAULT_MUSIC_VOLUME,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the session.

        Args:
            trip: Trip to play
            tracks: Track pool for background music
            device_type: Display kind
            countdown_seconds: Auto-play countdown length
            default_volume: Music volume when the trip does not set one
            rng: Random source for the playlist shuffle

        Raises:
            InvalidDurationError: If the trip's total duration is negative
        """
        validate_duration(trip.total_duration)

        self.trip = trip
        self.device_type = device_type
        self.countdown_seconds = countdown_seconds
        self.default_volume = default_volume
        self.timeline = resolve_timeline(trip)
        self.playlist = generate_playlist(
            select_music_pool(trip.background_music, tracks), trip.total_duration, rng
        )

        self.phase = PlaybackPhase.IDLE
        self.current_time = 0.0
        self.countdown_remaining = 0

        logger.info(
            f"Session for {trip.id}: {trip.photo_count} photos, "
            f"{trip.total_duration}s, {len(self.playlist)} playlist tracks"
        )

    @property
    def photos(self) -> list[Photo]:
        return self.trip.photos

    @property
    def total_duration(self) -> float:
        return self.trip.total_duration

    @property
    def has_photos(self) -> bool:
        return bool(self.trip.photos)

    @property
    def is_playing(self) -> bool:
        return self.phase == PlaybackPhase.PLAYING

    @property
    def current_index(self) -> int:
        """Index of the photo on screen."""
        return get_current_photo_index(self.current_time, self.timeline, self.photos)

    @property
    def current_photo(self) -> Optional[Photo]:
        if not self.photos:
            return None
        return self.photos[self.current_index]

    @property
    def current_track(self) -> Optional[CurrentTrack]:
        """Track that should be playing, or None when there is no music."""
        return get_current_track(self.playlist, self.current_time)

    @property
    def volume(self) -> float:
        volume = self.trip.background_music.volume
        return self.default_volume if volume is None else volume

    @property
    def progress(self) -> float:
        """Position through the photos as a percentage."""
        if not self.photos:
            return 0.0
        return (self.current_index + 1) / len(self.photos) * 100

    @property
    def time_remaining(self) -> str:
        return format_time(max(0.0, self.total_duration - self.current_time))

    @property
    def position_label(self) -> str:
        """Status line such as "Photo 3 of 12 · 0:45 remaining"."""
        return (
            f"Photo {self.current_index + 1} of {len(self.photos)} · "
            f"{self.time_remaining} remaining"
        )

    def upcoming_photos(self, count: int) -> list[Photo]:
        """Photos from the current one onward, for prefetching.

        Args:
            count: Maximum number of photos

        Returns:
            Up to count photos starting at the current index
        """
        start = self.current_index
        return self.photos[start : start + count]

    def start(self) -> PlaybackPhase:
        """Leave IDLE.

        TVs get the auto-play countdown; other devices wait paused for
        the viewer to press play.

        Returns:
            The new phase
        """
        if self.phase != PlaybackPhase.IDLE:
            return self.phase

        if self.device_type.autoplays and self.countdown_seconds > 0:
            self.countdown_remaining = self.countdown_seconds
            self.phase = PlaybackPhase.COUNTDOWN
        else:
            self.phase = PlaybackPhase.PAUSED
        return self.phase

    def countdown_tick(self) -> PlaybackPhase:
        """Advance the countdown by one second, starting playback at zero."""
        if self.phase != PlaybackPhase.COUNTDOWN:
            return self.phase

        self.countdown_remaining -= 1
        if self.countdown_remaining <= 0:
            self.countdown_remaining = 0
            self.phase = PlaybackPhase.PLAYING
            logger.info(f"Countdown finished, playing {self.trip.id}")
        return self.phase

    def cancel_countdown(self) -> PlaybackPhase:
        """Dismiss the countdown without starting playback."""
        if self.phase == PlaybackPhase.COUNTDOWN:
            self.countdown_remaining = 0
            self.phase = PlaybackPhase.PAUSED
        return self.phase

    def tick(self) -> PlaybackPhase:
        """Advance the clock by one tick.

        A tick that finds the clock at or past the end rewinds to 0 and
        pauses instead of advancing.

        Returns:
            The phase after the tick
        """
        if self.phase != PlaybackPhase.PLAYING:
            return self.phase

        if self.current_time >= self.total_duration:
            self.current_time = 0.0
            self.phase = PlaybackPhase.PAUSED
            logger.info(f"Reached end of {self.trip.id}, rewound to start")
            return self.phase

        self.current_time = round(self.current_time + TICK_SECONDS, 6)
        return self.phase

    def toggle(self) -> PlaybackPhase:
        """Switch between playing and paused.

        During the countdown this skips straight to playing.
        """
        if self.phase == PlaybackPhase.PLAYING:
            self.phase = PlaybackPhase.PAUSED
        elif self.phase in (PlaybackPhase.PAUSED, PlaybackPhase.COUNTDOWN):
            self.countdown_remaining = 0
            self.phase = PlaybackPhase.PLAYING
        return self.phase

    def next(self) -> None:
        """Jump to the start of the next photo (stays on the last one)."""
        if not self.photos:
            return
        index = min(len(self.photos) - 1, self.current_index + 1)
        self.current_time = get_photo_start_time(index, self.timeline, self.photos)

    def previous(self) -> None:
        """Jump to the start of the previous photo (stays on the first one)."""
        if not self.photos:
            return
        index = max(0, self.current_index - 1)
        self.current_time = get_photo_start_time(index, self.timeline, self.photos)

    def stop(self) -> None:
        """End the session."""
        self.phase = PlaybackPhase.IDLE
        self.current_time = 0.0
        self.countdown_remaining = 0
