"""
Widget config API endpoints.

`/config` is also served as `/widget-config` for older widget builds.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_app_settings, get_config_service
from api.middleware.identity import get_identity
from modules.identity.extractor import extract_credential
from shared.config import Settings
from shared.exceptions import ValidationError
from shared.models import Identity

from .interfaces import IConfigService
from .models import AuthBlock, ConfigResponse, ConfigUpdate, FallbackPolicy, WidgetSummary

router = APIRouter()


def read_policy(identity: Identity, settings: Settings) -> FallbackPolicy:
    """
    Fallback policy for dashboard-facing config reads.

    Only fully anonymous (dashboard) reads may fall back to the global
    default, and only when the deployment allows it.
    """
    if identity.is_anonymous and settings.allow_global_default_fallback:
        return FallbackPolicy.INCLUDE_GLOBAL_DEFAULT
    return FallbackPolicy.TENANT_ONLY


def build_auth_block(request: Request, identity: Identity) -> AuthBlock:
    credential: Optional[str] = extract_credential(request.headers.get("authorization")) or None
    return AuthBlock(
        instance_id=identity.tenant_id,
        comp_id=identity.component_id,
        instance_token=credential,
        is_authenticated=credential is not None,
    )


@router.get("/config", response_model=ConfigResponse)
@router.get("/widget-config", response_model=ConfigResponse, include_in_schema=False)
async def get_config(
    request: Request,
    identity: Identity = Depends(get_identity),
    service: IConfigService = Depends(get_config_service),
    settings: Settings = Depends(get_app_settings),
) -> ConfigResponse:
    """
    Get the effective widget config for the caller.

    The record is created on first read when both tenant and component
    are known.
    """
    record = await service.get_effective_config(identity, read_policy(identity, settings))
    return await service.to_response(identity, record, auth=build_auth_block(request, identity))


@router.put("/config", response_model=ConfigResponse)
@router.put("/widget-config", response_model=ConfigResponse, include_in_schema=False)
async def update_config(
    patch: ConfigUpdate,
    identity: Identity = Depends(get_identity),
    service: IConfigService = Depends(get_config_service),
) -> ConfigResponse:
    """
    Update the widget config for the caller.

    Settings omitted from the body are reset to their defaults. A body
    holding only `premiumPlanName` from a tenant-level caller sets the
    plan on every widget of that tenant.
    """
    record = await service.update_config(identity, patch)
    return await service.to_response(identity, record)


@router.get("/widgets", response_model=list[WidgetSummary])
async def list_widgets(
    identity: Identity = Depends(get_identity),
    service: IConfigService = Depends(get_config_service),
) -> list[WidgetSummary]:
    """
    List the widget placements configured under the caller's tenant.
    """
    if not identity.tenant_id:
        raise ValidationError("Instance ID is required to list widgets")
    return await service.list_widgets(identity.tenant_id)
