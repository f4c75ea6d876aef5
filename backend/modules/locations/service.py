"""
Location service implementation.

Scoped CRUD over location records, with opportunistic enrichment:
addresses are geocoded and images stored through the injected providers.
Every provider call is bounded by settings.enrichment_timeout, and any
enrichment failure only leaves the enriched field unset.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

from shared.config import Settings, get_settings
from shared.exceptions import ExternalServiceError, ValidationError
from shared.models import Identity
from providers.base import BlobStore, Coordinates, Geocoder, ImagePayload
from providers.storage import decode_image_data, is_image_reference

from .access import check_access, list_filters
from .exceptions import LocationNotFoundError
from .interfaces import ILocationService
from .models import Location, LocationCreate, LocationUpdate
from .repository import LocationRepository
from .samples import sample_locations

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LocationService(ILocationService):
    """
    Location service backed by a LocationRepository.

    Implements ILocationService protocol.
    """

    def __init__(
        self,
        repository: LocationRepository,
        geocoder: Geocoder,
        blob_store: BlobStore,
        settings: Optional[Settings] = None,
    ):
        self._repo = repository
        self._geocoder = geocoder
        self._blobs = blob_store
        self._settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_locations(self, identity: Identity) -> list[Location]:
        filters = list_filters(identity)
        if filters is None:
            return sample_locations()

        locations = self._repo.list(filters)
        if not locations and identity.is_editor_mode:
            return sample_locations()
        return locations

    async def get_location(self, identity: Identity, location_id: str) -> Location:
        return self._load(identity, location_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_location(
        self,
        identity: Identity,
        payload: LocationCreate,
        upload: Optional[ImagePayload] = None,
    ) -> Location:
        data: dict[str, Any] = {
            **payload.fields(),
            "tenant_id": identity.tenant_id,
            "component_id": identity.component_id,
        }

        image_url = await self._resolve_image(upload, payload.image)
        if image_url:
            data["image_url"] = image_url

        coords = await self._geocode(payload.address)
        if coords is not None:
            data["latitude"] = coords.latitude
            data["longitude"] = coords.longitude

        location = self._repo.create(data)
        logger.info(
            f"Created location {location.id} "
            f"(tenant={'yes' if location.tenant_id else 'no'}, component={location.component_id or '-'})"
        )
        return location

    async def update_location(
        self,
        identity: Identity,
        location_id: str,
        payload: LocationUpdate,
        upload: Optional[ImagePayload] = None,
    ) -> Location:
        existing = self._load(identity, location_id)
        values = payload.changes()

        new_image = upload is not None or (
            payload.image is not None and not is_image_reference(payload.image)
        )
        if new_image:
            if existing.image_url:
                await self._delete_image(existing.image_url)
            # The old blob is gone; a failed replacement leaves no image
            values["image_url"] = await self._resolve_image(upload, payload.image)
        elif payload.image is not None and payload.image != existing.image_url:
            values["image_url"] = payload.image

        address = values.get("address", existing.address)
        moved = address != existing.address
        if moved or not existing.has_coordinates:
            coords = await self._geocode(address)
            if coords is not None:
                values["latitude"] = coords.latitude
                values["longitude"] = coords.longitude
            elif moved:
                values["latitude"] = None
                values["longitude"] = None

        updated = self._repo.update(location_id, values)
        if updated is None:
            raise LocationNotFoundError(location_id)
        return updated

    async def delete_location(self, identity: Identity, location_id: str) -> None:
        existing = self._load(identity, location_id)
        if existing.image_url:
            await self._delete_image(existing.image_url)
        if not self._repo.delete(location_id):
            raise LocationNotFoundError(location_id)
        logger.info(f"Deleted location {location_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load(self, identity: Identity, location_id: str) -> Location:
        location = self._repo.get_by_id(location_id)
        if location is None:
            raise LocationNotFoundError(location_id)
        check_access(identity, location)
        return location

    async def _bounded(self, call: Awaitable[T], action: str) -> Optional[T]:
        """Await an enrichment call; timeouts and provider errors yield None."""
        try:
            return await asyncio.wait_for(call, timeout=self._settings.enrichment_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{action} timed out after {self._settings.enrichment_timeout}s")
        except ExternalServiceError as e:
            logger.warning(f"{action} failed: {e.message}")
        return None

    async def _geocode(self, address: str) -> Optional[Coordinates]:
        return await self._bounded(self._geocoder.geocode(address), "Geocoding")

    async def _resolve_image(
        self,
        upload: Optional[ImagePayload],
        image: Optional[str],
    ) -> Optional[str]:
        """URL for the request's image input, uploading binary or encoded data."""
        if upload is None and image is not None:
            if is_image_reference(image):
                return image
            try:
                upload = decode_image_data(image)
            except ValidationError as e:
                logger.warning(f"Ignoring image: {e.message}")
                return None
        if upload is None:
            return None
        return await self._bounded(self._blobs.upload(upload), "Image upload")

    async def _delete_image(self, url: str) -> None:
        removed = await self._bounded(self._blobs.delete(url), "Image delete")
        if removed is False:
            logger.debug(f"No stored image to delete at {url}")
