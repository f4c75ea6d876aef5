"""
Shared infrastructure for Mapsy backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory and store selection
- store: Document store interface and in-memory implementation
- exceptions: Base exception classes
- models: The per-request Identity

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_document_store, reset_client_cache
from .exceptions import (
    MapsyError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ServerConfigurationError,
    DuplicateKeyError,
    ExternalServiceError,
)
from .models import Identity, TrustLevel
from .store import IDocumentStore, InMemoryDocumentStore, MISSING, PRESENT, In, NotEqual

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_document_store",
    "reset_client_cache",
    "MapsyError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ServerConfigurationError",
    "DuplicateKeyError",
    "ExternalServiceError",
    "Identity",
    "TrustLevel",
    "IDocumentStore",
    "InMemoryDocumentStore",
    "MISSING",
    "PRESENT",
    "In",
    "NotEqual",
]
