"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TrustLevel(str, Enum):
    """How far the caller's identity evidence could be verified."""

    TRUSTED = "trusted"            # Signature verified against the instance secret
    UNVERIFIABLE = "unverifiable"  # Claims decoded without a secret to check them
    ABSENT = "absent"              # No credential, or one that failed verification


class Identity(BaseModel):
    """
    The (tenant, component) identity resolved for a single request.

    Derived per request and never persisted. `tenant_id` only ever comes
    from a decoded credential; `component_id` comes from client-supplied
    side channels (header, query, body).

    The four shapes are handled distinctly:
    - anonymous: neither id (dashboard / legacy access)
    - tenant-only: tenant without a placement selected
    - editor mode: component without tenant (widget editor / preview)
    - fully scoped: both ids
    """

    tenant_id: Optional[str] = Field(None, description="Verified instance identifier")
    component_id: Optional[str] = Field(None, description="Widget placement identifier")
    trust: TrustLevel = Field(default=TrustLevel.ABSENT, description="Verification outcome")
    vendor_product_id: Optional[str] = Field(
        None,
        description="External purchase signal carried by the credential",
    )

    model_config = {"frozen": True}

    @field_validator("tenant_id", "component_id", "vendor_product_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_anonymous(self) -> bool:
        return self.tenant_id is None and self.component_id is None

    @property
    def is_tenant_only(self) -> bool:
        return self.tenant_id is not None and self.component_id is None

    @property
    def is_editor_mode(self) -> bool:
        return self.tenant_id is None and self.component_id is not None

    @property
    def is_fully_scoped(self) -> bool:
        return self.tenant_id is not None and self.component_id is not None

    @classmethod
    def anonymous(cls, component_id: Optional[str] = None) -> "Identity":
        """Identity with no verified tenant."""
        return cls(component_id=component_id)
