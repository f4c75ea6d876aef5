"""
Identity dependency.

Resolves the tenant/component identity of every request. A missing
credential always yields an identity without a tenant. A bad one does
too in permissive deployments; in strict deployments it is a 401.
"""

from fastapi import Depends, Request

from shared.models import Identity
from modules.identity.interfaces import IIdentityService

from ..dependencies import get_identity_service
from .request import read_request_body


async def get_identity(
    request: Request,
    service: IIdentityService = Depends(get_identity_service),
) -> Identity:
    """
    Dependency that resolves the request's Identity.

    Usage:
        @router.get("/locations")
        async def list_locations(identity: Identity = Depends(get_identity)):
            ...
    """
    body = await read_request_body(request)
    return await service.resolve(
        authorization=request.headers.get("authorization", ""),
        headers=request.headers,
        query_params=request.query_params,
        body=body.fields,
    )
