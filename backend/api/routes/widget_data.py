"""
Widget bootstrap endpoint.

Returns config and locations in one round trip.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.configs.interfaces import IConfigService
from modules.configs.models import ConfigResponse, FallbackPolicy
from modules.locations.interfaces import ILocationService
from modules.locations.models import Location
from modules.locations.samples import sample_locations
from shared.models import Identity

from ..dependencies import get_config_service, get_location_service
from ..middleware.identity import get_identity

router = APIRouter()


class WidgetDataResponse(BaseModel):
    """Everything the widget needs to render."""

    config: ConfigResponse
    locations: list[Location]


@router.get("/widget-data", response_model=WidgetDataResponse)
async def widget_data(
    identity: Identity = Depends(get_identity),
    configs: IConfigService = Depends(get_config_service),
    locations: ILocationService = Depends(get_location_service),
) -> WidgetDataResponse:
    """
    Get config and locations for the caller.

    - no tenant, no component: default settings, free plan, sample locations
    - component only (editor): the component's config and locations, or samples
    - tenant: effective config (never the global default) and scoped locations
    """
    if identity.is_anonymous:
        return WidgetDataResponse(
            config=await configs.to_response(identity, None),
            locations=sample_locations(),
        )

    if identity.is_editor_mode:
        record = await configs.find_config(identity, FallbackPolicy.TENANT_ONLY)
    else:
        record = await configs.get_effective_config(identity, FallbackPolicy.TENANT_ONLY)

    return WidgetDataResponse(
        config=await configs.to_response(identity, record),
        locations=await locations.list_locations(identity),
    )
