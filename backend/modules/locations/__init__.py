"""
Locations module.

Location records scoped by tenant and component, with best-effort
geocoding and image storage.

Public API:
- ILocationService: Interface for location operations
- Location, LocationCreate, LocationUpdate: Location models
- check_access: Scope check for a single record
- Location exceptions: LocationNotFoundError, LocationAccessDeniedError
"""

from .interfaces import ILocationService
from .models import (
    AccessDenialReason,
    BusinessHours,
    Location,
    LocationCategory,
    LocationCreate,
    LocationUpdate,
)
from .access import check_access
from .samples import sample_locations
from .exceptions import LocationAccessDeniedError, LocationNotFoundError

__all__ = [
    # Interface
    "ILocationService",
    # Models
    "AccessDenialReason",
    "BusinessHours",
    "Location",
    "LocationCategory",
    "LocationCreate",
    "LocationUpdate",
    # Access
    "check_access",
    "sample_locations",
    # Exceptions
    "LocationAccessDeniedError",
    "LocationNotFoundError",
]
