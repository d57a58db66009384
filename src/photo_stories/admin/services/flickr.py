"""Flickr album access for trip imports.

Provides two photo sources:
- FlickrClient: the Flickr REST API (public albums, needs an API key)
- GuestPassScraper: guest pass pages scraped as HTML (private albums, no key)
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# //live.staticflickr.com/{server}/{id}_{secret}[_{size}].jpg
STATIC_URL_PATTERN = re.compile(
    r"staticflickr\.com/(\d+)/(\d+)_([a-z0-9]+)(?:_[a-z])?\.(?:jpg|png|gif)", re.IGNORECASE
)

# Size suffixes: _b (1024), _h (1600), _k (2048)
PREFERRED_SIZES = ("k", "h", "b")

# API extras in order of preference (highest quality first)
API_URL_KEYS = ("url_o", "url_k", "url_h", "url_l", "url_c")


class FlickrError(Exception):
    """Error talking to Flickr or parsing its responses."""


@dataclass
class FlickrAlbumRef:
    """Parsed Flickr album URL.

    Attributes:
        user_id: Username or NSID from the URL
        photoset_id: Album ID (or guest pass token)
        is_guest_pass: Whether the URL is a private guest pass link
    """

    user_id: str
    photoset_id: str
    is_guest_pass: bool = False


@dataclass
class FlickrPhoto:
    """A photo or video found in a Flickr album.

    Attributes:
        id: Flickr photo ID
        title: Photo title (may be empty)
        secret: URL secret
        server: Static server ID
        datetaken: Date taken as reported by Flickr
        type: "photo" or "video"
        url: Best display URL if already known (API results)
        thumbnail_url: Poster URL for videos
        video_url: Stream URL for videos
    """

    id: str
    title: str = ""
    secret: str = ""
    server: str = ""
    datetaken: Optional[str] = None
    type: str = "photo"
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None

    @property
    def is_video(self) -> bool:
        """Check if this item is a video."""
        return self.type == "video"

    def static_url(self, size: str = "b") -> str:
        """Build the static image URL for a size suffix."""
        return f"https://live.staticflickr.com/{self.server}/{self.id}_{self.secret}_{size}.jpg"

    def display_url(self) -> str:
        """Get the URL shown in the slideshow."""
        if self.url:
            return self.url
        if self.is_video and self.thumbnail_url:
            return self.thumbnail_url
        return self.static_url("b")


def parse_flickr_url(url: str) -> FlickrAlbumRef:
    """Extract user and album IDs from a Flickr album URL.

    Supported formats:
    - https://www.flickr.com/photos/username/albums/12345 (public)
    - https://www.flickr.com/gp/username/albumid (guest pass)

    Args:
        url: Album URL

    Returns:
        FlickrAlbumRef

    Raises:
        ValueError: If the URL matches neither format
    """
    patterns = [
        r"flickr\.com/photos/([^/]+)/albums/(\d+)",
        r"flickr\.com/gp/([^/]+)/([^/?]+)",
    ]

    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return FlickrAlbumRef(
                user_id=match.group(1),
                photoset_id=match.group(2),
                is_guest_pass="/gp/" in url,
            )

    raise ValueError(
        "Could not parse Flickr album URL. Supported formats:\n"
        "  - https://www.flickr.com/photos/username/albums/12345\n"
        "  - https://www.flickr.com/gp/username/albumid"
    )


def best_api_photo_url(photo: Dict) -> str:
    """Get the best available URL from a Flickr API photo object.

    Args:
        photo: Photo entry from flickr.photosets.getPhotos

    Returns:
        Highest-quality URL present, else a constructed 1024px URL
    """
    for key in API_URL_KEYS:
        if photo.get(key):
            return photo[key]
    return f"https://live.staticflickr.com/{photo.get('server')}/{photo.get('id')}_{photo.get('secret')}_b.jpg"


class FlickrClient:
    """Client for the Flickr REST API.

    Attributes:
        api_key: Flickr API key
        api_secret: Flickr API secret (optional for public albums)
        base_url: REST endpoint
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        api_secret: Optional[str] = None,
        base_url: str = "https://api.flickr.com/services/rest/",
        timeout: int = 30,
    ):
        """Initialize the client.

        Args:
            api_key: Flickr API key
            api_secret: Flickr API secret
            base_url: REST endpoint
            timeout: Request timeout in seconds

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError(
                "FLICKR_API_KEY environment variable is not set. "
                "Get one from https://www.flickr.com/services/apps/create/"
            )
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url
        self.timeout = timeout

    def _call(self, method: str, **params) -> Dict:
        """Call a Flickr API method and return the decoded payload.

        Raises:
            FlickrError: On HTTP failure or a non-ok API status
        """
        query = {
            "method": method,
            "api_key": self.api_key,
            "format": "json",
            "nojsoncallback": "1",
            **params,
        }

        try:
            response = requests.get(self.base_url, params=query, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FlickrError(f"Flickr API error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FlickrError(f"Flickr API returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise FlickrError("Flickr API returned an unexpected payload")
        if data.get("stat") != "ok":
            raise FlickrError(f"Flickr API error: {data.get('message', 'Unknown error')}")
        return data

    def find_user_nsid(self, username: str) -> str:
        """Resolve a Flickr username to a user NSID.

        Args:
            username: Flickr username

        Returns:
            NSID (e.g., "12345678@N01")
        """
        data = self._call("flickr.people.findByUsername", username=username)
        try:
            return data["user"]["nsid"]
        except (KeyError, TypeError) as e:
            raise FlickrError(f"Flickr user not found: {username}") from e

    def get_album_photos(self, album: FlickrAlbumRef) -> List[FlickrPhoto]:
        """Fetch all photos in an album.

        Args:
            album: Parsed album reference

        Returns:
            List of FlickrPhoto in album order

        Raises:
            FlickrError: If the album cannot be read
        """
        user_nsid = album.user_id

        # Usernames are resolved to NSIDs; an NSID contains "@"
        if "@" not in album.user_id:
            logger.info("Resolving username to user ID...")
            try:
                user_nsid = self.find_user_nsid(album.user_id)
                logger.info(f"Resolved to NSID: {user_nsid}")
            except FlickrError as e:
                logger.warning(f"Could not resolve username, trying with provided ID: {e}")

        try:
            data = self._call(
                "flickr.photosets.getPhotos",
                photoset_id=album.photoset_id,
                user_id=user_nsid,
                extras="description,date_taken,url_o,url_k,url_h,url_l,url_c",
            )
        except FlickrError as e:
            if album.is_guest_pass:
                raise FlickrError(
                    f"{e}\n\nThis is a private album with a guest pass. "
                    "Make the album public, or use 'import scrape' with the guest pass URL."
                ) from e
            raise

        try:
            items = data["photoset"]["photo"]
        except (KeyError, TypeError) as e:
            raise FlickrError(f"Flickr API returned no photos for album {album.photoset_id}") from e

        return [
            FlickrPhoto(
                id=str(photo["id"]),
                title=photo.get("title", ""),
                secret=photo.get("secret", ""),
                server=str(photo.get("server", "")),
                datetaken=photo.get("datetaken"),
                url=best_api_photo_url(photo),
            )
            for photo in items
        ]


class GuestPassScraper:
    """Scraper for Flickr guest pass album pages.

    Works with private albums shared through a guest pass link; no API
    key is needed. Follows "next" links across album pages.
    """

    def __init__(self, max_pages: int = 50, timeout: int = 60):
        """Initialize the scraper.

        Args:
            max_pages: Safety limit on pages followed
            timeout: Request timeout in seconds
        """
        self.max_pages = max_pages
        self.timeout = timeout
        self.headers = {"User-Agent": USER_AGENT}

    def scrape(self, url: str) -> List[FlickrPhoto]:
        """Collect photos and videos from every page of a guest pass album.

        Args:
            url: Guest pass URL

        Returns:
            Unique photos in page order

        Raises:
            FlickrError: If the first page cannot be fetched
        """
        photos: List[FlickrPhoto] = []
        seen: set = set()
        page_url: Optional[str] = url
        page_num = 0

        while page_url and page_num < self.max_pages:
            page_num += 1
            logger.info(f"Processing page {page_num}: {page_url}")

            try:
                response = requests.get(page_url, headers=self.headers, timeout=self.timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException as e:
                if page_num == 1:
                    raise FlickrError(f"Failed to fetch guest pass page: {e}") from e
                logger.warning(f"Stopping at page {page_num}: {e}")
                break

            soup = BeautifulSoup(response.text, "html.parser")
            page_photos = self.extract_photos(soup, len(photos))
            if not page_photos:
                page_photos = self.extract_photos_from_html(response.text, len(photos))

            new_photos = [p for p in page_photos if p.id not in seen]
            for photo in new_photos:
                seen.add(photo.id)
            photos.extend(new_photos)

            logger.info(
                f"Found {len(page_photos)} photos "
                f"({len(new_photos)} new, total: {len(photos)})"
            )

            next_url = self.find_next_page(soup)
            page_url = urljoin(page_url, next_url) if next_url else None

        logger.info(f"Collected {len(photos)} photos from {page_num} page(s)")
        return photos

    def extract_photos(self, soup: BeautifulSoup, offset: int = 0) -> List[FlickrPhoto]:
        """Extract videos and photos from a parsed page.

        Videos are collected first so their poster images are not counted
        again as photos.

        Args:
            soup: Parsed page
            offset: Number of items already collected (for default titles)

        Returns:
            Items found on the page
        """
        items: List[FlickrPhoto] = []
        seen: set = set()

        for video in soup.select('video[src*="staticflickr"]'):
            video_src = video.get("src") or ""
            poster_src = video.get("poster") or ""
            match = STATIC_URL_PATTERN.search(poster_src)
            if not match or not video_src or match.group(2) in seen:
                continue

            seen.add(match.group(2))
            link = video.find_parent("a")
            title = video.get("title") or (link.get("title") if link else None)
            items.append(
                FlickrPhoto(
                    id=match.group(2),
                    server=match.group(1),
                    secret=match.group(3),
                    title=(title or f"Video {offset + len(items) + 1}").strip(),
                    type="video",
                    thumbnail_url=_absolute(poster_src),
                    video_url=_absolute(video_src),
                )
            )

        for img in soup.find_all("img"):
            src = img.get("src") or img.get("data-src") or ""
            match = STATIC_URL_PATTERN.search(src)
            if not match or match.group(2) in seen:
                continue

            seen.add(match.group(2))
            link = img.find_parent("a")
            title = img.get("alt") or img.get("title") or (link.get("title") if link else None)
            items.append(
                FlickrPhoto(
                    id=match.group(2),
                    server=match.group(1),
                    secret=match.group(3),
                    title=(title or f"Photo {offset + len(items) + 1}").strip(),
                )
            )

        return items

    def extract_photos_from_html(self, html: str, offset: int = 0) -> List[FlickrPhoto]:
        """Fallback: find static image URLs anywhere in the raw HTML."""
        items: List[FlickrPhoto] = []
        seen: set = set()

        for match in STATIC_URL_PATTERN.finditer(html):
            photo_id = match.group(2)
            if photo_id in seen:
                continue
            seen.add(photo_id)
            items.append(
                FlickrPhoto(
                    id=photo_id,
                    server=match.group(1),
                    secret=match.group(3),
                    title=f"Photo {offset + len(items) + 1}",
                )
            )

        return items

    def find_next_page(self, soup: BeautifulSoup) -> Optional[str]:
        """Find the href of an enabled "next" pagination link."""
        for link in soup.find_all("a", href=True):
            text = link.get_text(strip=True).lower()
            rel = link.get("rel") or []
            classes = " ".join(link.get("class") or [])

            if "disabled" in classes:
                continue
            if "next" in text or "next" in rel or "next" in classes.lower():
                return link["href"]

        return None

    def best_available_url(self, photo: FlickrPhoto) -> str:
        """Probe for the largest static size that exists.

        Args:
            photo: Scraped photo

        Returns:
            URL of the first size answering a HEAD request, else the 1024px URL
        """
        for size in PREFERRED_SIZES:
            url = photo.static_url(size)
            try:
                response = requests.head(url, headers=self.headers, timeout=self.timeout)
                if response.ok:
                    return url
            except requests.exceptions.RequestException as e:
                logger.debug(f"Size {size} unavailable for {photo.id}: {e}")

        return photo.static_url("b")


def _absolute(url: str) -> str:
    """Add the https scheme to protocol-relative URLs."""
    return url if url.startswith("http") else f"https:{url}"

