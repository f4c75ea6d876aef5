"""
Config key resolution.

Keys are deterministic composites of the tenant and component ids:

    <prefix>-default           global default (no tenant, no component)
    <prefix>-<tenant>          tenant-level record
    <prefix>-<tenant>-<comp>   tenant + component record
"""

from typing import Optional

from .models import FallbackPolicy

DEFAULT_SUFFIX = "default"


def default_config_key(prefix: str) -> str:
    return f"{prefix}-{DEFAULT_SUFFIX}"


def compute_config_key(
    tenant_id: Optional[str],
    component_id: Optional[str],
    prefix: str = "mapsy",
) -> str:
    """
    Compute the key a (tenant, component) pair is stored under.

    A component without a tenant has no key of its own; such callers
    fall through to the global default key here and are looked up by
    component id instead (see ConfigService.find_config).
    """
    if not tenant_id:
        return default_config_key(prefix)
    if not component_id:
        return f"{prefix}-{tenant_id}"
    return f"{prefix}-{tenant_id}-{component_id}"


def build_lookup_chain(
    tenant_id: Optional[str],
    component_id: Optional[str],
    policy: FallbackPolicy,
    prefix: str = "mapsy",
) -> list[str]:
    """
    Ordered keys to try when reading a config.

    desired key -> tenant-level key (if different) -> global default
    (only under INCLUDE_GLOBAL_DEFAULT).
    """
    chain: list[str] = []
    if tenant_id:
        chain.append(compute_config_key(tenant_id, component_id, prefix))
        tenant_key = compute_config_key(tenant_id, None, prefix)
        if tenant_key not in chain:
            chain.append(tenant_key)
    if policy == FallbackPolicy.INCLUDE_GLOBAL_DEFAULT:
        chain.append(default_config_key(prefix))
    return chain
