"""Factory functions for creating enrichment providers."""

import logging
from typing import Optional

from shared.config import Settings, get_settings

from .base import BlobStore, Geocoder
from .geocoding import GoogleGeocoder
from .storage import LocalBlobStore, SupabaseBlobStore

logger = logging.getLogger(__name__)


def get_geocoder(settings: Optional[Settings] = None) -> Geocoder:
    """Build the geocoder configured by settings."""
    settings = settings or get_settings()
    return GoogleGeocoder(
        api_key=settings.google_maps_api_key,
        timeout=settings.geocoding_timeout,
    )


def get_blob_store(settings: Optional[Settings] = None) -> BlobStore:
    """Build the blob store configured by settings.

    Returns:
        SupabaseBlobStore when a storage bucket is configured, otherwise
        LocalBlobStore writing under settings.uploads_dir
    """
    settings = settings or get_settings()
    if settings.uses_remote_storage:
        from shared.database import get_supabase_client
        return SupabaseBlobStore(get_supabase_client(), settings.supabase_storage_bucket)
    logger.info(f"Using local image storage under {settings.uploads_dir}")
    return LocalBlobStore(settings.uploads_dir, settings.uploads_url_prefix)
