"""Photo timeline calculation.

Distributes a slideshow's total duration across its photos and resolves
which photo is on screen at a given playback time.
"""

from typing import Mapping, Sequence

from photo_stories.core.models import Photo, PhotoWindow, Trip


class InvalidDurationError(ValueError):
    """A negative total duration was passed to a scheduling function."""

    def __init__(self, total_duration: float):
        super().__init__(f"Total duration must be non-negative, got {total_duration}")
        self.total_duration = total_duration


def validate_duration(total_duration: float) -> None:
    """Fail fast on a negative total duration.

    Args:
        total_duration: Duration in seconds

    Raises:
        InvalidDurationError: If total_duration is negative
    """
    if total_duration < 0:
        raise InvalidDurationError(total_duration)


def calculate_photo_timeline(
    photos: Sequence[Photo], total_duration: float
) -> dict[str, PhotoWindow]:
    """Distribute total duration evenly across photos.

    Each photo gets an abutting half-open window [start, end) of length
    total_duration / len(photos), in list order.

    Args:
        photos: Photos in slideshow order
        total_duration: Total duration in seconds

    Returns:
        Mapping of photo ID to its time window (empty if there are no photos)

    Raises:
        InvalidDurationError: If total_duration is negative
    """
    validate_duration(total_duration)

    if not photos:
        return {}

    base_duration = total_duration / len(photos)
    current_time = 0.0
    timeline = {}

    for photo in photos:
        timeline[photo.id] = PhotoWindow(
            start=current_time,
            end=current_time + base_duration,
            duration=base_duration,
        )
        current_time += base_duration

    return timeline


def get_current_photo_index(
    current_time: float,
    photo_timeline: Mapping[str, PhotoWindow],
    photos: Sequence[Photo],
) -> int:
    """Get the index of the photo shown at a playback time.

    Args:
        current_time: Playback time in seconds
        photo_timeline: Mapping of photo ID to time window
        photos: Photos in slideshow order

    Returns:
        Index of the photo whose window contains current_time. Past the
        end of the timeline the last index is returned; 0 if there are
        no photos.
    """
    if not photos:
        return 0

    for i, photo in enumerate(photos):
        window = photo_timeline.get(photo.id)
        if window and window.contains(current_time):
            return i

    return len(photos) - 1


def get_photo_start_time(
    photo_index: int,
    photo_timeline: Mapping[str, PhotoWindow],
    photos: Sequence[Photo],
) -> float:
    """Get the start time of the photo at an index.

    Args:
        photo_index: Photo index
        photo_timeline: Mapping of photo ID to time window
        photos: Photos in slideshow order

    Returns:
        Window start in seconds, or 0 for an out-of-range index
    """
    if not photos or photo_index < 0 or photo_index >= len(photos):
        return 0.0

    window = photo_timeline.get(photos[photo_index].id)
    return window.start if window else 0.0


def resolve_timeline(trip: Trip) -> dict[str, PhotoWindow]:
    """Get the timeline for a trip.

    A precomputed timeline stored in the trip file wins over an even split.

    Args:
        trip: Loaded trip

    Returns:
        Mapping of photo ID to time window
    """
    if trip.photo_timeline:
        return dict(trip.photo_timeline)
    return calculate_photo_timeline(trip.photos, trip.total_duration)


def format_time(seconds: float) -> str:
    """Format seconds as M:SS."""
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"
