"""Tests for the widget bootstrap endpoint."""

from tests.conftest import auth_headers


class TestWidgetData:
    def test_anonymous(self, client, store):
        response = client.get("/api/widget-data")

        assert response.status_code == 200
        data = response.json()
        assert data["config"]["headerTitle"] == "Our Locations"
        assert data["config"]["premiumPlanName"] == "free"
        assert len(data["locations"]) == 5
        assert store.find("widget_configs") == []

    def test_fully_scoped(self, client, tenant_token, store):
        headers = auth_headers(tenant_token, "comp-1")
        client.post("/api/locations", json={"name": "Shop", "address": "1 Main St"}, headers=headers)

        data = client.get("/api/widget-data", headers=headers).json()

        assert [l["name"] for l in data["locations"]] == ["Shop"]
        assert data["config"]["mapZoomLevel"] == 12
        assert store.find_one("widget_configs", {"config_key": "mapsy-tenant-1-comp-1"}) is not None

    def test_fully_scoped_without_locations(self, client, tenant_token):
        data = client.get("/api/widget-data", headers=auth_headers(tenant_token, "comp-1")).json()
        assert data["locations"] == []

    def test_tenant_only(self, client, tenant_token, store):
        data = client.get("/api/widget-data", headers=auth_headers(tenant_token)).json()
        assert len(data["locations"]) == 5
        assert store.find("widget_configs") == []

    def test_editor_preview(self, client, tenant_token):
        client.put(
            "/api/config",
            json={"widgetName": "Preview me"},
            headers=auth_headers(tenant_token, "comp-1"),
        )

        data = client.get("/api/widget-data", params={"compId": "comp-1"}).json()

        assert data["config"]["widgetName"] == "Preview me"
        assert len(data["locations"]) == 5

    def test_never_serves_global_default(self, client, tenant_token):
        client.put("/api/config", json={"headerTitle": "Everywhere"})
        data = client.get("/api/widget-data", headers=auth_headers(tenant_token, "comp-1")).json()
        assert data["config"]["headerTitle"] == "Our Locations"
