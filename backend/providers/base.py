"""Base classes and models for external enrichment providers."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """A geocoded position.

    Attributes:
        latitude: Degrees north, in [-90, 90]
        longitude: Degrees east, in [-180, 180]
    """

    model_config = {"frozen": True}

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ImagePayload(BaseModel):
    """Binary image content on its way to a blob store."""

    model_config = {"frozen": True}

    data: bytes
    filename: str
    content_type: str = "image/png"


class Geocoder(ABC):
    """Abstract base class for address geocoders."""

    @abstractmethod
    async def geocode(self, address: str) -> Optional[Coordinates]:
        """Resolve an address to coordinates.

        Args:
            address: Free-form postal address

        Returns:
            Coordinates, or None if the address could not be resolved
        """
        pass


class BlobStore(ABC):
    """Abstract base class for image storage.

    Blobs are addressed by the URL returned from upload().
    """

    @abstractmethod
    async def upload(self, image: ImagePayload) -> str:
        """Store an image and return the URL it is served from.

        Raises:
            ExternalServiceError: If the image could not be stored
        """
        pass

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Delete the blob behind `url`.

        Returns:
            True if a blob was removed, False if `url` is not one of ours
            or nothing was there

        Raises:
            ExternalServiceError: If the store rejected the deletion
        """
        pass
