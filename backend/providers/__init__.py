"""External enrichment providers (geocoding, image storage)."""

from .base import BlobStore, Coordinates, Geocoder, ImagePayload
from .factory import get_blob_store, get_geocoder

__all__ = [
    "BlobStore",
    "Coordinates",
    "Geocoder",
    "ImagePayload",
    "get_blob_store",
    "get_geocoder",
]
