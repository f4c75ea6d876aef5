"""Tests for location scope rules."""

import pytest

from modules.locations.access import check_access, denial_reason, list_filters
from modules.locations.exceptions import LocationAccessDeniedError
from modules.locations.models import AccessDenialReason, Location
from shared.models import Identity
from shared.store import MISSING


def location(tenant_id=None, component_id=None) -> Location:
    return Location(id="loc-1", name="Shop", address="1 Main St", tenant_id=tenant_id, component_id=component_id)


FULL = Identity(tenant_id="t1", component_id="c1")
TENANT = Identity(tenant_id="t1")
EDITOR = Identity(component_id="c1")
ANONYMOUS = Identity()


class TestDenialReason:
    """Every identity shape against every record shape."""

    @pytest.mark.parametrize(
        "identity, record, expected",
        [
            (FULL, location("t1", "c1"), None),
            (FULL, location("t2", "c1"), AccessDenialReason.WRONG_TENANT),
            (FULL, location("t1", "c2"), AccessDenialReason.WRONG_COMPONENT),
            (FULL, location("t1", None), AccessDenialReason.WRONG_COMPONENT),
            (FULL, location(), AccessDenialReason.WRONG_TENANT),
            (TENANT, location("t1", None), None),
            (TENANT, location("t1", "c1"), AccessDenialReason.COMPONENT_SCOPE_REQUIRED),
            (TENANT, location("t2", None), AccessDenialReason.WRONG_TENANT),
            (EDITOR, location(None, "c1"), None),
            (EDITOR, location("t1", "c1"), None),
            (EDITOR, location("t1", "c2"), AccessDenialReason.WRONG_COMPONENT),
            (EDITOR, location(), AccessDenialReason.WRONG_COMPONENT),
            (ANONYMOUS, location(), None),
            (ANONYMOUS, location("t1", None), AccessDenialReason.WRONG_TENANT),
            (ANONYMOUS, location(None, "c1"), AccessDenialReason.COMPONENT_SCOPE_REQUIRED),
        ],
    )
    def test_matrix(self, identity, record, expected):
        assert denial_reason(identity, record) == expected


class TestCheckAccess:
    def test_raises_with_reason(self):
        with pytest.raises(LocationAccessDeniedError) as exc_info:
            check_access(FULL, location("t2", "c1"))
        assert exc_info.value.reason == AccessDenialReason.WRONG_TENANT
        assert exc_info.value.details["reason"] == "WRONG_TENANT"
        assert exc_info.value.details["location_id"] == "loc-1"

    def test_allows_matching_scope(self):
        check_access(FULL, location("t1", "c1"))


class TestListFilters:
    def test_fully_scoped(self):
        assert list_filters(FULL) == {"tenant_id": "t1", "component_id": "c1"}

    def test_editor(self):
        assert list_filters(EDITOR) == {"component_id": "c1"}

    def test_anonymous(self):
        assert list_filters(ANONYMOUS) == {"tenant_id": MISSING, "component_id": MISSING}

    def test_tenant_only_uses_samples(self):
        assert list_filters(TENANT) is None
