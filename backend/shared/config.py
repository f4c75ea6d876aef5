"""
Centralized configuration for the Mapsy backend.

All settings are loaded from environment variables with sensible defaults.
Feature-specific settings are namespaced (e.g., SUPABASE_*, GEOCODING_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Mapsy API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8001
    reload: bool = False

    # CORS settings (widgets are embedded on arbitrary host sites)
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Backing store
    store_backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Blob storage (empty bucket means local filesystem fallback)
    supabase_storage_bucket: str = ""
    uploads_dir: str = "uploads"
    uploads_url_prefix: str = "/uploads/locations"
    max_image_bytes: int = 20 * 1024 * 1024

    # Identity
    instance_secret: str = ""
    strict_auth: bool = False
    require_instance_secret: bool = False
    component_header: str = "X-Wix-Comp-Id"

    # Config lookup
    config_key_prefix: str = "mapsy"
    allow_global_default_fallback: bool = False

    # Enrichment (geocoding, image storage)
    google_maps_api_key: str = ""
    geocoding_timeout: float = 10.0
    enrichment_timeout: float = 15.0

    @property
    def secret_required(self) -> bool:
        """Whether a missing instance secret is a server misconfiguration."""
        return self.strict_auth or self.require_instance_secret

    @property
    def uses_remote_storage(self) -> bool:
        return bool(self.supabase_storage_bucket)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
