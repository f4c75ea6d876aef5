"""
Locations module interface.

The API layer depends on ILocationService for all location operations.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Identity
from providers.base import ImagePayload

from .models import Location, LocationCreate, LocationUpdate


@runtime_checkable
class ILocationService(Protocol):
    """
    Interface for scoped location operations.

    Every operation takes the request's resolved Identity; scoping is
    enforced here, not by callers.
    """

    async def list_locations(self, identity: Identity) -> list[Location]:
        """
        List the locations visible to an identity.

        Tenant-only identities (no placement selected) get the built-in
        sample dataset; editor previews of an empty placement do too.
        """
        ...

    async def get_location(self, identity: Identity, location_id: str) -> Location:
        """
        Get a single location.

        Raises:
            LocationNotFoundError: If no location has this id
            LocationAccessDeniedError: If the location is outside the identity's scope
        """
        ...

    async def create_location(
        self,
        identity: Identity,
        payload: LocationCreate,
        upload: Optional[ImagePayload] = None,
    ) -> Location:
        """
        Create a location stamped with the identity's scope.

        Geocoding and image storage are best-effort: failures leave
        coordinates or image_url unset and never fail the creation.
        """
        ...

    async def update_location(
        self,
        identity: Identity,
        location_id: str,
        payload: LocationUpdate,
        upload: Optional[ImagePayload] = None,
    ) -> Location:
        """
        Apply the supplied fields to a location.

        Raises:
            LocationNotFoundError: If no location has this id
            LocationAccessDeniedError: If the location is outside the identity's scope
        """
        ...

    async def delete_location(self, identity: Identity, location_id: str) -> None:
        """
        Delete a location and (best-effort) its image.

        Raises:
            LocationNotFoundError: If no location has this id
            LocationAccessDeniedError: If the location is outside the identity's scope
        """
        ...
