"""
Scope rules for location records.

A record is visible to a request when every scoping id the request carries
matches the record, and the record carries no scope the request lacks.
Unscoped records are visible only to unscoped (dashboard) requests.
"""

from typing import Any, Optional

from shared.models import Identity
from shared.store import MISSING

from .exceptions import LocationAccessDeniedError
from .models import AccessDenialReason, Location


def denial_reason(identity: Identity, location: Location) -> Optional[AccessDenialReason]:
    """Return why `identity` may not touch `location`, or None if it may."""
    if identity.tenant_id is not None and location.tenant_id != identity.tenant_id:
        return AccessDenialReason.WRONG_TENANT

    if identity.is_anonymous:
        if location.tenant_id is not None:
            return AccessDenialReason.WRONG_TENANT
        if location.component_id is not None:
            return AccessDenialReason.COMPONENT_SCOPE_REQUIRED
        return None

    if identity.component_id is not None:
        if location.component_id != identity.component_id:
            return AccessDenialReason.WRONG_COMPONENT
    elif location.component_id is not None:
        return AccessDenialReason.COMPONENT_SCOPE_REQUIRED

    return None


def check_access(identity: Identity, location: Location) -> None:
    """
    Raises:
        LocationAccessDeniedError: If the record is outside the identity's scope
    """
    reason = denial_reason(identity, location)
    if reason is not None:
        raise LocationAccessDeniedError(location.id, reason)


def list_filters(identity: Identity) -> Optional[dict[str, Any]]:
    """
    Store filters for listing the identity's locations.

    Returns None for tenant-only identities, which are served the sample
    dataset instead of store contents.
    """
    if identity.is_fully_scoped:
        return {"tenant_id": identity.tenant_id, "component_id": identity.component_id}
    if identity.is_editor_mode:
        return {"component_id": identity.component_id}
    if identity.is_anonymous:
        return {"tenant_id": MISSING, "component_id": MISSING}
    return None
