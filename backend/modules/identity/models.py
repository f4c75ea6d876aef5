"""
Identity module data models.

These models define the claims carried by an instance credential and the
diagnostic views exposed over the API.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.models import TrustLevel


class InstanceClaims(BaseModel):
    """
    Claims embedded in an instance credential.

    Only `instanceId` is required; anything else the identity provider
    adds is kept but ignored.
    """

    instance_id: str = Field(..., alias="instanceId", min_length=1, description="Tenant identifier")
    vendor_product_id: Optional[str] = Field(
        None,
        alias="vendorProductId",
        description="Purchased product reference, if any",
    )

    model_config = {"populate_by_name": True, "extra": "allow", "frozen": True}


class AuthInfoResponse(BaseModel):
    """Echo of the resolved identity for client-side diagnostics."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    instance_id: Optional[str] = None
    comp_id: Optional[str] = None
    instance_token: Optional[str] = None
    is_authenticated: bool = False
    trust: TrustLevel = TrustLevel.ABSENT
