"""
Plans module.

Subscription tiers and effective-tier resolution.

Public API:
- PlanTier: Subscription tiers
- resolve_plan_tier: Pure effective-tier resolver
"""

from .models import PlanTier, LOWEST_PAID_TIER, PremiumStatusResponse
from .resolver import resolve_plan_tier

__all__ = [
    "PlanTier",
    "LOWEST_PAID_TIER",
    "PremiumStatusResponse",
    "resolve_plan_tier",
]
