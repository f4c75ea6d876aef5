"""
Location API endpoints.

Create and update accept JSON or multipart form bodies. An image may be
sent as a multipart `image` file, or as an `image` / `image_url` string
holding a data URI, raw base64, or an existing image URL.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_app_settings, get_location_service
from api.middleware.identity import get_identity
from api.middleware.request import parse_payload, read_image_upload, read_request_body
from shared.config import Settings
from shared.models import Identity

from .interfaces import ILocationService
from .models import Location, LocationCreate, LocationUpdate

router = APIRouter()


@router.get("", response_model=list[Location])
async def list_locations(
    identity: Identity = Depends(get_identity),
    service: ILocationService = Depends(get_location_service),
) -> list[Location]:
    """
    List the locations visible to the caller.

    Newest first. A tenant with no widget placement selected gets the
    built-in sample locations.
    """
    return await service.list_locations(identity)


@router.get("/{location_id}", response_model=Location)
async def get_location(
    location_id: str,
    identity: Identity = Depends(get_identity),
    service: ILocationService = Depends(get_location_service),
) -> Location:
    """
    Get a single location.
    """
    return await service.get_location(identity, location_id)


@router.post("", response_model=Location, status_code=201)
async def create_location(
    request: Request,
    identity: Identity = Depends(get_identity),
    service: ILocationService = Depends(get_location_service),
    settings: Settings = Depends(get_app_settings),
) -> Location:
    """
    Create a location scoped to the caller's tenant and component.

    Coordinates are filled in from the address when geocoding succeeds.
    """
    body = await read_request_body(request)
    payload = parse_payload(LocationCreate, body.fields)
    upload = await read_image_upload(body.file, settings.max_image_bytes)
    return await service.create_location(identity, payload, upload)


@router.put("/{location_id}", response_model=Location)
@router.post("/{location_id}", response_model=Location, include_in_schema=False)
async def update_location(
    location_id: str,
    request: Request,
    identity: Identity = Depends(get_identity),
    service: ILocationService = Depends(get_location_service),
    settings: Settings = Depends(get_app_settings),
) -> Location:
    """
    Update the supplied fields of a location.

    Also reachable as POST for clients that cannot send PUT with a
    multipart body.
    """
    body = await read_request_body(request)
    payload = parse_payload(LocationUpdate, body.fields)
    upload = await read_image_upload(body.file, settings.max_image_bytes)
    return await service.update_location(identity, location_id, payload, upload)


@router.delete("/{location_id}", status_code=204)
async def delete_location(
    location_id: str,
    identity: Identity = Depends(get_identity),
    service: ILocationService = Depends(get_location_service),
) -> None:
    """
    Delete a location and its stored image.
    """
    await service.delete_location(identity, location_id)
