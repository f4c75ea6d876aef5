"""
Plans module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlanTier(str, Enum):
    """Subscription tiers, lowest first."""

    FREE = "free"
    LIGHT = "light"
    BUSINESS = "business"
    BUSINESS_PRO = "business-pro"


# Tier granted when an external purchase signal exists but no tier is stored
LOWEST_PAID_TIER = PlanTier.LIGHT


class PremiumStatusResponse(BaseModel):
    """API response for the premium status check."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    premium_plan_name: PlanTier
    vendor_product_id: Optional[str] = None
    instance_id: Optional[str] = None
