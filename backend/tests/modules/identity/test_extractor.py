"""Tests for identity extraction from request parts."""

from modules.identity.extractor import extract_component_id, extract_credential


class TestExtractComponentId:
    """Component id channels, first match wins."""

    def test_header_wins(self):
        result = extract_component_id(
            headers={"X-Wix-Comp-Id": "from-header"},
            query_params={"compId": "from-query"},
            body={"compId": "from-body"},
        )
        assert result == "from-header"

    def test_lowercase_header(self):
        assert extract_component_id({"x-wix-comp-id": "c"}, {}) == "c"

    def test_primary_query_before_alternates(self):
        result = extract_component_id({}, {"comp_id": "alt", "compId": "primary"})
        assert result == "primary"

    def test_alternate_query_names(self):
        assert extract_component_id({}, {"comp_id": "a"}) == "a"
        assert extract_component_id({}, {"comp-id": "b"}) == "b"

    def test_body_field(self):
        assert extract_component_id({}, {}, {"compId": "from-body"}) == "from-body"

    def test_blank_values_are_skipped(self):
        result = extract_component_id({"X-Wix-Comp-Id": "  "}, {"compId": ""}, {"compId": "c"})
        assert result == "c"

    def test_absent(self):
        assert extract_component_id({}, {}, None) is None
        assert extract_component_id({}, {}, {"compId": 42}) is None

    def test_custom_header_name(self):
        assert extract_component_id({"X-Comp": "c"}, {}, header_name="X-Comp") == "c"

    def test_tenant_fields_are_never_read(self):
        """Client-supplied instance ids are not identity evidence."""
        result = extract_component_id({"X-Wix-Instance-Id": "t"}, {"instanceId": "t"}, {"instanceId": "t"})
        assert result is None


class TestExtractCredential:
    def test_strips_bearer_prefix(self):
        assert extract_credential("Bearer abc.def") == "abc.def"

    def test_raw_credential(self):
        assert extract_credential("abc.def") == "abc.def"

    def test_empty(self):
        assert extract_credential(None) == ""
        assert extract_credential("") == ""
        assert extract_credential("Bearer ") == ""
