"""
Health check endpoints.

Provides endpoints for monitoring application health and store connectivity.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings

from ..dependencies import ServiceContainer, get_app_settings, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 whenever the API is running; `database` reports whether
    the backing store answered.
    """
    try:
        connected = container.store.ping()
    except RuntimeError as e:
        logger.warning(f"Document store unavailable: {e}")
        connected = False

    return HealthResponse(
        status="OK",
        message=f"{settings.app_name} is running",
        version=settings.app_version,
        database="connected" if connected else "disconnected",
    )
