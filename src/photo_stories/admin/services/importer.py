"""Trip import and maintenance service.

Turns Flickr album photos into trip JSON files, keeps the trips index in
sync, and edits per-trip background music settings.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from photo_stories.core.models import BackgroundMusic, Photo, Trip
from photo_stories.core.trip_store import TripStore
from photo_stories.admin.services.flickr import FlickrPhoto

logger = logging.getLogger(__name__)


def build_trip(
    photos: List[FlickrPhoto],
    trip_id: str,
    title: str = "Photo Trip",
    description: str = "",
    photo_duration: float = 5,
    music: Optional[BackgroundMusic] = None,
) -> Trip:
    """Build a trip from Flickr album photos.

    Photos are renumbered "photo-001", "photo-002", ... in album order.
    The trip leaves photo_timeline empty so the viewer splits the total
    duration evenly.

    Args:
        photos: Album items in order
        trip_id: Trip identifier
        title: Trip title
        description: Trip description
        photo_duration: Seconds per photo
        music: Background music settings (disabled by default)

    Returns:
        Trip ready to save
    """
    now = datetime.now().isoformat()
    trip_photos = []

    for index, photo in enumerate(photos, 1):
        default_caption = f"{'Video' if photo.is_video else 'Photo'} {index}"
        trip_photos.append(
            Photo(
                id=f"photo-{index:03d}",
                url=photo.display_url(),
                caption=photo.title or default_caption,
                timestamp=photo.datetaken or now,
                type=photo.type,
                thumbnail_url=photo.display_url() if photo.is_video else None,
                video_url=photo.video_url if photo.is_video else None,
            )
        )

    # First photo (not video) for the cover, or the first item
    cover = next((p for p in photos if not p.is_video), photos[0] if photos else None)

    return Trip(
        id=trip_id,
        title=title,
        description=description,
        cover_image=cover.display_url() if cover else "",
        created_date=date.today().isoformat(),
        total_duration=float(len(photos) * photo_duration),
        photos=trip_photos,
        photo_timeline={},
        background_music=music or BackgroundMusic(),
    )


@dataclass
class MusicUpdateResult:
    """Outcome of a bulk music update.

    Attributes:
        total: Number of trips inspected
        updated: Trip IDs whose music was enabled
        already_enabled: Trip IDs left untouched
    """

    total: int = 0
    updated: list[str] = field(default_factory=list)
    already_enabled: list[str] = field(default_factory=list)


class TripImporter:
    """Writes imported trips and edits existing ones.

    Attributes:
        store: Trip storage
    """

    def __init__(self, store: TripStore):
        """Initialize the importer.

        Args:
            store: Trip storage to write to
        """
        self.store = store

    def save(self, trip: Trip) -> Trip:
        """Save a trip file and upsert its index entry.

        Args:
            trip: Trip to save

        Returns:
            The saved trip
        """
        self.store.save_trip(trip)
        self.store.update_index(trip)
        return trip

    def set_music(
        self,
        trip_id: str,
        track_id: str,
        enabled: bool = True,
        volume: float = 0.3,
    ) -> Trip:
        """Set the background music track for a trip.

        Args:
            trip_id: Trip identifier
            track_id: Track identifier (must exist in tracks.json)
            enabled: Whether music is enabled
            volume: Playback volume

        Returns:
            The updated trip

        Raises:
            TripNotFoundError: If the trip does not exist
            ValueError: If the track does not exist
        """
        trip = self.store.load_trip(trip_id)

        if self.store.get_track(track_id) is None:
            raise ValueError(f"Track not found: {track_id}")

        trip.background_music = BackgroundMusic(enabled=enabled, track_id=track_id, volume=volume)
        self.store.save_trip(trip)
        logger.info(f"Updated {trip_id} with music: {track_id} (enabled={enabled})")
        return trip

    def enable_music_all(self, volume: float = 0.3) -> MusicUpdateResult:
        """Enable shuffled background music for every trip.

        Trips with music already enabled are left as they are.

        Args:
            volume: Playback volume for newly enabled trips

        Returns:
            MusicUpdateResult summary
        """
        result = MusicUpdateResult()

        for trip_id in self.store.list_trip_ids():
            trip = self.store.load_trip(trip_id)
            result.total += 1

            if trip.background_music.enabled:
                result.already_enabled.append(trip_id)
                continue

            trip.background_music = BackgroundMusic(enabled=True, volume=volume)
            self.store.save_trip(trip)
            result.updated.append(trip_id)

        logger.info(
            f"Music enabled for {len(result.updated)}/{result.total} trips "
            f"({len(result.already_enabled)} already enabled)"
        )
        return result
