"""Tests for effective plan tier resolution."""

from modules.plans import LOWEST_PAID_TIER, PlanTier, resolve_plan_tier


class TestResolvePlanTier:
    def test_stored_tier_wins(self):
        assert resolve_plan_tier(PlanTier.BUSINESS, "prod-1") == PlanTier.BUSINESS

    def test_stored_free_is_kept(self):
        assert resolve_plan_tier(PlanTier.FREE, "prod-1") == PlanTier.FREE

    def test_purchase_signal_grants_lowest_paid_tier(self):
        assert resolve_plan_tier(None, "prod-1") == LOWEST_PAID_TIER == PlanTier.LIGHT

    def test_blank_purchase_signal(self):
        assert resolve_plan_tier(None, "  ") == PlanTier.FREE

    def test_nothing(self):
        assert resolve_plan_tier(None) == PlanTier.FREE

    def test_accepts_raw_value(self):
        assert resolve_plan_tier("business-pro") == PlanTier.BUSINESS_PRO
