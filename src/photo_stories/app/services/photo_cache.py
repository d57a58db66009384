"""Photo cache service for the viewer.

Downloads upcoming slideshow photos ahead of time so the current photo
can be opened locally without waiting on the network.
"""

import hashlib
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urlparse

import requests

from photo_stories.app.logging_config import get_logger
from photo_stories.core.models import Photo

logger = get_logger(__name__)


class PhotoCache:
    """Local cache for trip photos.

    Attributes:
        cache_dir: Base directory for cached files
        timeout: HTTP timeout in seconds
    """

    def __init__(self, cache_dir: Path, timeout: int = 30):
        """Initialize the photo cache.

        Args:
            cache_dir: Base directory for cached files
            timeout: HTTP timeout in seconds
        """
        self.cache_dir = cache_dir
        self.timeout = timeout
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get_cache_path(self, photo: Photo) -> Path:
        """Get the local cache path for a photo.

        Files are keyed by a hash of the URL so a re-imported trip with
        new URLs never reuses stale images.

        Args:
            photo: Photo to look up

        Returns:
            Path in cache directory
        """
        digest = hashlib.sha256(photo.url.encode("utf-8")).hexdigest()[:16]
        suffix = Path(urlparse(photo.url).path).suffix or ".jpg"
        return self.cache_dir / f"{digest}{suffix}"

    def is_cached(self, photo: Photo) -> bool:
        return self.get_cache_path(photo).exists()

    def fetch(self, photo: Photo) -> Optional[Path]:
        """Download a photo if it is not cached yet.

        Args:
            photo: Photo to download

        Returns:
            Local path, or None if the download failed
        """
        cache_path = self.get_cache_path(photo)
        if cache_path.exists():
            return cache_path

        if photo.url.startswith(("http://", "https://")):
            try:
                response = requests.get(photo.url, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                logger.warning(f"Failed to fetch {photo.id} from {photo.url}: {e}")
                return None

            # Write to a temp name first so a partial download is never served
            tmp_path = cache_path.with_suffix(cache_path.suffix + ".part")
            try:
                tmp_path.write_bytes(response.content)
                tmp_path.replace(cache_path)
            except OSError as e:
                logger.warning(f"Failed to cache {photo.id} at {cache_path}: {e}")
                if tmp_path.exists():
                    tmp_path.unlink()
                return None
            logger.debug(f"Cached {photo.id} ({len(response.content)} bytes)")
            return cache_path

        local = Path(photo.url)
        return local if local.exists() else None

    def preload(self, photos: Iterable[Photo]) -> int:
        """Fetch a batch of photos.

        Args:
            photos: Photos to download, in priority order

        Returns:
            Number of photos now available locally
        """
        return sum(1 for photo in photos if self.fetch(photo) is not None)

    def clear(self) -> int:
        """Remove all cached photos.

        Returns:
            Number of files removed
        """
        removed = 0
        for path in self.cache_dir.iterdir():
            if path.is_file():
                path.unlink()
                removed += 1
        return removed
