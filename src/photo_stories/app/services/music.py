"""Background music player for the slideshow.

Follows the slideshow's playlist lookup: each sync call compares the
track and offset the session expects with what the device is playing
and restarts the stream when they disagree. Any audio failure is logged
and leaves the slideshow silent.
"""

import threading
import time
from pathlib import Path
from typing import Callable, Generator, Optional

import miniaudio
import numpy as np

from photo_stories.app.logging_config import get_logger
from photo_stories.core.models import Track
from photo_stories.core.playlist import CurrentTrack

logger = get_logger(__name__)

SAMPLE_RATE = 44100
NCHANNELS = 2

# Restart the stream when the device drifts this far from the session clock
RESYNC_THRESHOLD_SECONDS = 1.0


class MusicPlayer:
    """Plays the slideshow's current track with miniaudio.

    Attributes:
        music_dir: Directory holding the track audio files
        volume: Playback volume (0.0 to 1.0)
    """

    def __init__(
        self,
        music_dir: Path,
        volume: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the player.

        Args:
            music_dir: Directory holding the track audio files
            volume: Initial playback volume
            clock: Monotonic time source used to estimate the stream position
        """
        self.music_dir = music_dir
        self.volume = max(0.0, min(1.0, volume))
        self._clock = clock

        self._device: Optional[miniaudio.PlaybackDevice] = None
        self._generator: Optional[Generator] = None
        self._decoded: dict[str, miniaudio.DecodedSoundFile] = {}
        self._failed: set[str] = set()

        self._track_id: Optional[str] = None
        self._started_at = 0.0
        self._start_offset = 0.0

        self._stop_event = threading.Event()

    @property
    def is_playing(self) -> bool:
        return self._device is not None

    @property
    def current_track_id(self) -> Optional[str]:
        return self._track_id if self._device is not None else None

    @property
    def position_seconds(self) -> float:
        """Estimated offset into the playing track."""
        if self._device is None:
            return 0.0
        return self._start_offset + (self._clock() - self._started_at)

    def set_volume(self, volume: float) -> None:
        """Set playback volume.

        Args:
            volume: Volume level (0.0 to 1.0)
        """
        self.volume = max(0.0, min(1.0, volume))

    def sync(self, current: Optional[CurrentTrack], playing: bool) -> None:
        """Bring the audio in line with the slideshow.

        Args:
            current: Track the session expects (None = no music)
            playing: Whether the slideshow is playing
        """
        if current is None or not playing:
            self.stop()
            return

        track_id = current.track.id
        if track_id in self._failed:
            return

        if (
            self._device is not None
            and self._track_id == track_id
            and abs(self.position_seconds - current.track_elapsed_time) < RESYNC_THRESHOLD_SECONDS
        ):
            return

        self.play(current.track, current.track_elapsed_time)

    def _decode(self, track: Track) -> miniaudio.DecodedSoundFile:
        """Decode a track, caching the samples for later seeks."""
        if track.id not in self._decoded:
            path = self.music_dir / track.file
            logger.debug(f"Decoding track {track.id}: {path}")
            self._decoded[track.id] = miniaudio.decode_file(
                str(path),
                output_format=miniaudio.SampleFormat.SIGNED16,
                nchannels=NCHANNELS,
                sample_rate=SAMPLE_RATE,
            )
        return self._decoded[track.id]

    def _stream_generator(self, source_samples, start_sample: int):
        """Generator that yields audio chunks as requested by miniaudio.

        Receives the number of frames needed via send() and yields that
        many frames as an int16 array of shape (num_frames, nchannels).
        """
        sample_pos = start_sample

        num_frames = yield np.zeros((0, NCHANNELS), dtype=np.int16)

        while not self._stop_event.is_set() and sample_pos < len(source_samples):
            if num_frames is None or num_frames <= 0:
                break

            samples_needed = num_frames * NCHANNELS
            end_pos = min(sample_pos + samples_needed, len(source_samples))
            samples = np.array(source_samples[sample_pos:end_pos], dtype=np.int16)

            if len(samples) < samples_needed:
                padding = samples_needed - len(samples)
                samples = np.concatenate([samples, np.zeros(padding, dtype=np.int16)])

            if self.volume != 1.0:
                samples = (samples * self.volume).astype(np.int16)

            sample_pos = end_pos
            num_frames = yield samples.reshape((num_frames, NCHANNELS))

    def play(self, track: Track, offset_seconds: float = 0.0) -> bool:
        """Start a track at an offset, replacing whatever is playing.

        Args:
            track: Track to play
            offset_seconds: Position within the track

        Returns:
            True if playback started
        """
        self.stop()

        try:
            source = self._decode(track)
            start_sample = int(offset_seconds * source.sample_rate) * source.nchannels
            if start_sample >= len(source.samples):
                logger.debug(f"Offset {offset_seconds:.1f}s is past the end of {track.id}")
                return False

            self._stop_event.clear()
            self._generator = self._stream_generator(source.samples, start_sample)
            next(self._generator)

            self._device = miniaudio.PlaybackDevice(
                output_format=miniaudio.SampleFormat.SIGNED16,
                nchannels=source.nchannels,
                sample_rate=source.sample_rate,
            )
            self._device.start(self._generator)
        except Exception as e:
            logger.error(f"Music playback failed for {track.id}: {e}")
            self._failed.add(track.id)
            self.stop()
            return False

        self._track_id = track.id
        self._start_offset = offset_seconds
        self._started_at = self._clock()
        logger.info(f"Playing {track.id} from {offset_seconds:.1f}s")
        return True

    def stop(self) -> None:
        """Stop the audio device."""
        self._stop_event.set()

        if self._generator is not None:
            self._generator.close()
            self._generator = None

        if self._device is not None:
            try:
                self._device.stop()
                self._device.close()
            except Exception as e:
                logger.warning(f"Error closing audio device: {e}")
            self._device = None

    def close(self) -> None:
        """Stop playback and drop decoded audio."""
        self.stop()
        self._decoded.clear()
        self._track_id = None
