"""
Identity diagnostics endpoint.
"""

from fastapi import APIRouter, Depends, Request

from modules.identity.extractor import extract_credential
from modules.identity.models import AuthInfoResponse
from shared.models import Identity

from ..middleware.identity import get_identity

router = APIRouter()


@router.get("/auth-info", response_model=AuthInfoResponse)
async def auth_info(
    request: Request,
    identity: Identity = Depends(get_identity),
) -> AuthInfoResponse:
    """
    Echo the resolved identity and the raw credential.

    Lets the widget check what the backend made of its credentials.
    """
    credential = extract_credential(request.headers.get("authorization")) or None
    return AuthInfoResponse(
        instance_id=identity.tenant_id,
        comp_id=identity.component_id,
        instance_token=credential,
        is_authenticated=credential is not None,
        trust=identity.trust,
    )
