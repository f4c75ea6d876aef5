"""
Configs module.

Per-widget display configuration, keyed by tenant and component, with
lazy creation, fallback lookup and plan inheritance across a tenant.

Public API:
- IConfigService: Interface for config operations
- ConfigRecord, ConfigUpdate, ConfigResponse: Config models
- FallbackPolicy: Whether reads may fall back to the global default
- compute_config_key, build_lookup_chain: Key resolution
- Config exceptions: ConfigNotFoundError
"""

from .interfaces import IConfigService
from .models import (
    AuthBlock,
    ConfigRecord,
    ConfigResponse,
    ConfigUpdate,
    FallbackPolicy,
    UpdateMode,
    ViewMode,
    WidgetSettings,
    WidgetSummary,
)
from .keys import build_lookup_chain, compute_config_key, default_config_key
from .exceptions import ConfigNotFoundError

__all__ = [
    # Interface
    "IConfigService",
    # Models
    "AuthBlock",
    "ConfigRecord",
    "ConfigResponse",
    "ConfigUpdate",
    "FallbackPolicy",
    "UpdateMode",
    "ViewMode",
    "WidgetSettings",
    "WidgetSummary",
    # Keys
    "build_lookup_chain",
    "compute_config_key",
    "default_config_key",
    # Exceptions
    "ConfigNotFoundError",
]
