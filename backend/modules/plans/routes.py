"""
Plan API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_config_service
from api.middleware.identity import get_identity
from modules.configs.interfaces import IConfigService
from modules.configs.models import FallbackPolicy
from shared.models import Identity

from .models import PremiumStatusResponse

router = APIRouter()


@router.get("/premium-status", response_model=PremiumStatusResponse)
async def premium_status(
    identity: Identity = Depends(get_identity),
    configs: IConfigService = Depends(get_config_service),
) -> PremiumStatusResponse:
    """
    Report the caller's effective plan.

    Stored plan (inherited across the tenant's widgets) first, then the
    purchase signal carried by the credential, then free. Never creates
    a config record.
    """
    record = await configs.find_config(identity, FallbackPolicy.TENANT_ONLY)
    return PremiumStatusResponse(
        premium_plan_name=await configs.resolve_plan(identity, record),
        vendor_product_id=identity.vendor_product_id,
        instance_id=identity.tenant_id,
    )
