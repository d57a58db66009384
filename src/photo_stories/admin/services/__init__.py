"""Services for photo-stories-admin.

Provides Flickr album access and trip import/maintenance.
"""

from photo_stories.admin.services.flickr import FlickrClient, GuestPassScraper
from photo_stories.admin.services.importer import TripImporter

__all__ = ["FlickrClient", "GuestPassScraper", "TripImporter"]
