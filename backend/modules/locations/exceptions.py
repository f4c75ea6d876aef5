"""
Locations module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError

from .models import AccessDenialReason


class LocationNotFoundError(NotFoundError):
    """Raised when a location id does not exist."""

    def __init__(self, location_id: str):
        super().__init__(
            f"Location {location_id} not found",
            code="LOCATION_NOT_FOUND",
            details={"location_id": location_id},
        )
        self.location_id = location_id


class LocationAccessDeniedError(AuthorizationError):
    """Raised when a location lies outside the caller's tenant/component scope."""

    MESSAGES = {
        AccessDenialReason.WRONG_TENANT: "Access denied - location belongs to a different instance",
        AccessDenialReason.WRONG_COMPONENT: "Access denied - location belongs to a different component",
        AccessDenialReason.COMPONENT_SCOPE_REQUIRED: "Access denied - component ID required",
    }

    def __init__(self, location_id: str, reason: AccessDenialReason):
        super().__init__(
            self.MESSAGES[reason],
            code="LOCATION_ACCESS_DENIED",
            details={"location_id": location_id, "reason": reason.value},
        )
        self.location_id = location_id
        self.reason = reason
