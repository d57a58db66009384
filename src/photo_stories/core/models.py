"""Data models for Photo Stories trips and music tracks.

Provides dataclasses for trips, photos, tracks and the trips index with
serialization to/from the camelCase JSON files the viewer reads.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class Photo:
    """A single photo or video item in a trip.

    Attributes:
        id: Unique item ID within the trip (e.g., "photo-001")
        url: Display URL (the poster image for videos)
        caption: Caption shown under the item
        timestamp: ISO timestamp when the item was taken
        type: Item type ("photo" or "video")
        thumbnail_url: Poster URL for videos
        video_url: Stream URL for videos
    """

    id: str
    url: str = ""
    caption: str = ""
    timestamp: str = ""
    type: str = "photo"
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None

    @property
    def is_video(self) -> bool:
        """Check if this item is a video."""
        return self.type == "video"

    @classmethod
    def from_dict(cls, data: dict) -> "Photo":
        """Create from a trip file photo entry."""
        return cls(
            id=str(data["id"]),
            url=data.get("url", ""),
            caption=data.get("caption", ""),
            timestamp=data.get("timestamp", ""),
            type=data.get("type", "photo"),
            thumbnail_url=data.get("thumbnailUrl"),
            video_url=data.get("videoUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a trip file photo entry."""
        result = {
            "id": self.id,
            "url": self.url,
            "caption": self.caption,
            "timestamp": self.timestamp,
            "type": self.type,
        }
        if self.is_video:
            result["thumbnailUrl"] = self.thumbnail_url
            result["videoUrl"] = self.video_url
        return result


@dataclass(frozen=True)
class PhotoWindow:
    """Time window during which a photo is shown.

    Attributes:
        start: Window start in seconds (inclusive)
        end: Window end in seconds (exclusive)
        duration: Window length in seconds
    """

    start: float
    end: float
    duration: float

    def contains(self, time_seconds: float) -> bool:
        """Check if a playback time falls inside this window."""
        return self.start <= time_seconds < self.end

    @classmethod
    def from_dict(cls, data: dict) -> "PhotoWindow":
        """Create from a trip file timeline entry."""
        start = float(data.get("start", 0.0))
        end = float(data.get("end", start))
        return cls(start=start, end=end, duration=float(data.get("duration", end - start)))

    def to_dict(self) -> dict[str, float]:
        """Convert to a trip file timeline entry."""
        return {"start": self.start, "end": self.end, "duration": self.duration}


@dataclass(frozen=True)
class Track:
    """A background music track.

    Attributes:
        id: Unique track ID (e.g., "carefree")
        title: Display title
        file: Audio filename relative to the music directory
        duration: Track length in seconds
        artist: Artist name for attribution
        mood: Optional mood tag
        description: Optional free-form description
        license: Optional license text for attribution
        source_url: Optional attribution link
    """

    id: str
    file: str
    duration: float
    title: str = ""
    artist: str = ""
    mood: Optional[str] = None
    description: Optional[str] = None
    license: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def attribution(self) -> str:
        """Format the attribution line shown while the track plays."""
        title = self.title or self.id
        if self.artist:
            return f"♪ {title} by {self.artist}"
        return f"♪ {title}"

    @classmethod
    def from_dict(cls, data: dict) -> "Track":
        """Create from a tracks.json entry."""
        return cls(
            id=str(data["id"]),
            file=data.get("file", f"{data['id']}.mp3"),
            duration=float(data.get("duration", 0.0)),
            title=data.get("title", ""),
            artist=data.get("artist", ""),
            mood=data.get("mood"),
            description=data.get("description"),
            license=data.get("license"),
            source_url=data.get("sourceUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a tracks.json entry."""
        result: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "file": self.file,
            "duration": self.duration,
            "artist": self.artist,
        }
        for key, value in (
            ("mood", self.mood),
            ("description", self.description),
            ("license", self.license),
            ("sourceUrl", self.source_url),
        ):
            if value is not None:
                result[key] = value
        return result


@dataclass
class BackgroundMusic:
    """Background music settings for a trip.

    Attributes:
        enabled: Whether music plays during the slideshow
        track_id: Preferred track ID (None = shuffle the whole pool)
        volume: Playback volume (0.0 to 1.0), None = viewer default
    """

    enabled: bool = False
    track_id: Optional[str] = None
    volume: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BackgroundMusic":
        """Create from a trip file backgroundMusic entry."""
        if not data:
            return cls()
        volume = data.get("volume")
        return cls(
            enabled=bool(data.get("enabled", False)),
            track_id=data.get("trackId"),
            volume=float(volume) if volume is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a trip file backgroundMusic entry."""
        result: dict[str, Any] = {"enabled": self.enabled}
        if self.volume is not None:
            result["volume"] = self.volume
        if self.track_id:
            result["trackId"] = self.track_id
        return result


@dataclass
class Trip:
    """One photo story: an ordered photo list plus metadata.

    Attributes:
        id: Unique trip ID (also the trip filename stem)
        title: Display title
        description: Optional description
        cover_image: URL of the cover photo
        created_date: ISO date when the trip was imported
        total_duration: Slideshow length in seconds
        photos: Photos in slideshow order
        photo_timeline: Precomputed per-photo windows (empty = compute evenly)
        background_music: Music settings
        audio_timeline: Narration settings carried through untouched
    """

    id: str
    title: str = "Photo Trip"
    description: str = ""
    cover_image: str = ""
    created_date: str = field(default_factory=lambda: date.today().isoformat())
    total_duration: float = 0.0
    photos: list[Photo] = field(default_factory=list)
    photo_timeline: dict[str, PhotoWindow] = field(default_factory=dict)
    background_music: BackgroundMusic = field(default_factory=BackgroundMusic)
    audio_timeline: dict[str, Any] = field(
        default_factory=lambda: {"enabled": False, "audioUrl": None, "segments": []}
    )

    @property
    def photo_count(self) -> int:
        """Get number of photos in the trip."""
        return len(self.photos)

    @property
    def has_audio(self) -> bool:
        """Check if the trip carries a narration track."""
        return bool(self.audio_timeline.get("enabled", False))

    @classmethod
    def from_dict(cls, data: dict) -> "Trip":
        """Create from a trip JSON document.

        Args:
            data: Parsed trip JSON

        Returns:
            Trip instance
        """
        timeline = {
            photo_id: PhotoWindow.from_dict(window)
            for photo_id, window in (data.get("photoTimeline") or {}).items()
        }
        return cls(
            id=str(data["id"]),
            title=data.get("title", "Photo Trip"),
            description=data.get("description", ""),
            cover_image=data.get("coverImage", ""),
            created_date=data.get("createdDate", date.today().isoformat()),
            total_duration=float(data.get("totalDuration", 0.0)),
            photos=[Photo.from_dict(p) for p in data.get("photos") or []],
            photo_timeline=timeline,
            background_music=BackgroundMusic.from_dict(data.get("backgroundMusic")),
            audio_timeline=data.get("audioTimeline")
            or {"enabled": False, "audioUrl": None, "segments": []},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a trip JSON document."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "coverImage": self.cover_image,
            "createdDate": self.created_date,
            "totalDuration": self.total_duration,
            "photos": [p.to_dict() for p in self.photos],
            "photoTimeline": {k: w.to_dict() for k, w in self.photo_timeline.items()},
            "audioTimeline": self.audio_timeline,
            "backgroundMusic": self.background_music.to_dict(),
        }

    def summary(self) -> "TripSummary":
        """Build the trips index entry for this trip."""
        return TripSummary(
            id=self.id,
            title=self.title,
            description=self.description,
            cover_image=self.cover_image,
            photo_count=self.photo_count,
            duration=self.total_duration,
            has_audio=self.has_audio,
            created_date=self.created_date,
        )


@dataclass
class TripSummary:
    """Entry in the trips index shown on the home screen."""

    id: str
    title: str
    description: str = ""
    cover_image: str = ""
    photo_count: int = 0
    duration: float = 0.0
    has_audio: bool = False
    created_date: str = ""

    @property
    def formatted_duration(self) -> str:
        """Format duration as "Xm Ys"."""
        total_seconds = int(self.duration)
        return f"{total_seconds // 60}m {total_seconds % 60}s"

    @classmethod
    def from_dict(cls, data: dict) -> "TripSummary":
        """Create from a trips.json entry."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", data["id"]),
            description=data.get("description", ""),
            cover_image=data.get("coverImage", ""),
            photo_count=int(data.get("photoCount", 0)),
            duration=float(data.get("duration", 0.0)),
            has_audio=bool(data.get("hasAudio", False)),
            created_date=data.get("createdDate", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a trips.json entry."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "coverImage": self.cover_image,
            "photoCount": self.photo_count,
            "duration": self.duration,
            "hasAudio": self.has_audio,
            "createdDate": self.created_date,
        }
