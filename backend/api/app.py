"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from shared.config import get_settings
from modules.configs.routes import router as configs_router
from modules.locations.routes import router as locations_router
from modules.plans.routes import router as plans_router

from .errors import register_exception_handlers
from .routes import auth_info, health, widget_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    if not settings.instance_secret:
        if settings.secret_required:
            logger.error("INSTANCE_SECRET is not set; authenticated requests will fail")
        else:
            logger.warning("INSTANCE_SECRET is not set; credentials will be decoded without verification")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant location directory for embeddable map widgets",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Locally stored images
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(locations_router, prefix="/api/locations", tags=["locations"])
    app.include_router(configs_router, prefix="/api", tags=["config"])
    app.include_router(widget_data.router, prefix="/api", tags=["widget"])
    app.include_router(plans_router, prefix="/api", tags=["plans"])
    app.include_router(auth_info.router, prefix="/api", tags=["identity"])

    return app


# Application instance for uvicorn
app = create_app()
