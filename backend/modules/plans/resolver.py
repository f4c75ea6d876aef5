"""
Effective plan tier resolution.

Pure: the result depends only on the arguments.
"""

from typing import Optional

from .models import LOWEST_PAID_TIER, PlanTier


def resolve_plan_tier(
    stored_tier: Optional[PlanTier],
    vendor_product_id: Optional[str] = None,
) -> PlanTier:
    """
    Determine the effective subscription tier.

    Args:
        stored_tier: Tier stored on (or inherited by) the config record
        vendor_product_id: External purchase reference from the credential

    Returns:
        The stored tier if any, else the lowest paid tier when a purchase
        signal exists, else free
    """
    if stored_tier is not None:
        return PlanTier(stored_tier)
    if vendor_product_id and vendor_product_id.strip():
        return LOWEST_PAID_TIER
    return PlanTier.FREE
