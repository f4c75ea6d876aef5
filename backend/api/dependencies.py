"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations on top of one shared
document store.

Tests build a container around an InMemoryDocumentStore and fake providers
and install it with set_container().
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.store import IDocumentStore
    from providers.base import BlobStore, Geocoder
    from modules.identity.interfaces import IIdentityService
    from modules.configs.interfaces import IConfigService
    from modules.locations.interfaces import ILocationService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: "IDocumentStore | None" = None,
        geocoder: "Geocoder | None" = None,
        blob_store: "BlobStore | None" = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._geocoder = geocoder
        self._blob_store = blob_store
        self._identity_service: "IIdentityService | None" = None
        self._config_service: "IConfigService | None" = None
        self._location_service: "ILocationService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> "IDocumentStore":
        """Get the document store shared by all repositories."""
        if self._store is None:
            from shared.database import get_document_store
            self._store = get_document_store(self.settings)
        return self._store

    @property
    def geocoder(self) -> "Geocoder":
        if self._geocoder is None:
            from providers.factory import get_geocoder
            self._geocoder = get_geocoder(self.settings)
        return self._geocoder

    @property
    def blob_store(self) -> "BlobStore":
        if self._blob_store is None:
            from providers.factory import get_blob_store
            self._blob_store = get_blob_store(self.settings)
        return self._blob_store

    @property
    def identity(self) -> "IIdentityService":
        """Get the identity service instance."""
        if self._identity_service is None:
            from modules.identity.service import IdentityService
            self._identity_service = IdentityService(self.settings)
        return self._identity_service

    @property
    def configs(self) -> "IConfigService":
        """Get the config service instance."""
        if self._config_service is None:
            from modules.configs.repository import ConfigRepository
            from modules.configs.service import ConfigService
            self._config_service = ConfigService(ConfigRepository(self.store), self.settings)
        return self._config_service

    @property
    def locations(self) -> "ILocationService":
        """Get the location service instance."""
        if self._location_service is None:
            from modules.locations.repository import LocationRepository
            from modules.locations.service import LocationService
            self._location_service = LocationService(
                repository=LocationRepository(self.store),
                geocoder=self.geocoder,
                blob_store=self.blob_store,
                settings=self.settings,
            )
        return self._location_service

    def reset(self) -> None:
        """
        Reset all cached services.

        Injected collaborators (store, providers, settings) are kept.
        """
        self._identity_service = None
        self._config_service = None
        self._location_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (used by tests)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings() -> Settings:
    """FastAPI dependency for the container's settings."""
    return get_container().settings


def get_identity_service() -> "IIdentityService":
    """FastAPI dependency for identity service."""
    return get_container().identity


def get_config_service() -> "IConfigService":
    """FastAPI dependency for config service."""
    return get_container().configs


def get_location_service() -> "ILocationService":
    """FastAPI dependency for location service."""
    return get_container().locations
