"""Tests for the location endpoints."""

import pytest

from tests.conftest import auth_headers, create_instance_token

PNG = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def headers(tenant_token):
    return auth_headers(tenant_token, "comp-1")


def create(client, headers, **fields):
    body = {"name": "Shop", "address": "1 Main St", **fields}
    response = client.post("/api/locations", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateLocation:
    def test_json_body(self, client, headers):
        data = create(client, headers, phone="555-0100", category="restaurant")

        assert data["id"]
        assert data["tenant_id"] == "tenant-1"
        assert data["component_id"] == "comp-1"
        assert data["category"] == "restaurant"
        assert data["latitude"] == 40.7128
        assert data["longitude"] == -74.0060
        assert data["created_at"]

    def test_geocoding_failure_still_creates(self, client, headers, geocoder):
        geocoder.result = None
        data = create(client, headers)
        assert data["latitude"] is None
        assert data["longitude"] is None

    def test_multipart_with_image(self, client, tenant_token, blob_store):
        response = client.post(
            "/api/locations",
            data={"name": "Shop", "address": "1 Main St", "compId": "comp-7"},
            files={"image": ("shop.png", PNG, "image/png")},
            headers=auth_headers(tenant_token),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["component_id"] == "comp-7"
        assert blob_store.blobs[data["image_url"]].data == PNG

    def test_rejects_non_image_file(self, client, headers):
        response = client.post(
            "/api/locations",
            data={"name": "Shop", "address": "1 Main St"},
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Only image files are allowed"

    def test_missing_required_fields(self, client, headers):
        response = client.post("/api/locations", json={"name": "Shop"}, headers=headers)
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid request body"
        assert any(error["loc"] == ["address"] for error in data["detail"])

    def test_invalid_email(self, client, headers):
        response = client.post(
            "/api/locations",
            json={"name": "Shop", "address": "1 Main St", "email": "nope"},
            headers=headers,
        )
        assert response.status_code == 400

    def test_malformed_json(self, client, headers):
        response = client.post(
            "/api/locations",
            content=b"{not json",
            headers={**headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Malformed JSON body"


class TestReadLocations:
    def test_list_is_scoped(self, client, headers, tenant_token):
        mine = create(client, headers, name="Mine")
        create(client, auth_headers(tenant_token, "comp-2"), name="Sibling")
        create(client, auth_headers(create_instance_token("tenant-2"), "comp-1"), name="Foreign")

        response = client.get("/api/locations", headers=headers)

        assert response.status_code == 200
        assert [l["id"] for l in response.json()] == [mine["id"]]

    def test_tenant_only_gets_samples(self, client, tenant_token):
        data = client.get("/api/locations", headers=auth_headers(tenant_token)).json()
        assert [l["id"] for l in data] == [f"default-{i}" for i in range(1, 6)]

    def test_get_one(self, client, headers):
        created = create(client, headers)
        response = client.get(f"/api/locations/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Shop"

    def test_wrong_tenant_is_forbidden(self, client, headers):
        created = create(client, headers)
        other = auth_headers(create_instance_token("tenant-2"), "comp-1")

        response = client.get(f"/api/locations/{created['id']}", headers=other)

        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "LOCATION_ACCESS_DENIED"
        assert data["details"]["reason"] == "WRONG_TENANT"

    def test_wrong_component_is_forbidden(self, client, headers, tenant_token):
        created = create(client, headers)
        response = client.get(
            f"/api/locations/{created['id']}",
            headers=auth_headers(tenant_token, "comp-2"),
        )
        assert response.status_code == 403
        assert response.json()["details"]["reason"] == "WRONG_COMPONENT"

    def test_not_found(self, client, headers):
        response = client.get("/api/locations/missing", headers=headers)
        assert response.status_code == 404
        assert response.json()["code"] == "LOCATION_NOT_FOUND"


class TestUpdateLocation:
    def test_put(self, client, headers):
        created = create(client, headers, phone="555")
        response = client.put(
            f"/api/locations/{created['id']}",
            json={"name": "Renamed", "phone": ""},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["phone"] is None
        assert data["address"] == "1 Main St"

    def test_post_alias_with_new_image(self, client, headers, blob_store):
        created = create(client, headers)
        response = client.post(
            f"/api/locations/{created['id']}",
            data={"website": "shop.example.com"},
            files={"image": ("new.png", PNG, "image/png")},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["website"] == "shop.example.com"
        assert data["image_url"] in blob_store.blobs

    def test_forbidden_outside_scope(self, client, headers, tenant_token):
        created = create(client, headers)
        response = client.put(
            f"/api/locations/{created['id']}",
            json={"name": "Hijacked"},
            headers=auth_headers(tenant_token),
        )
        assert response.status_code == 403
        assert response.json()["details"]["reason"] == "COMPONENT_SCOPE_REQUIRED"


class TestDeleteLocation:
    def test_delete(self, client, headers):
        created = create(client, headers)

        response = client.delete(f"/api/locations/{created['id']}", headers=headers)

        assert response.status_code == 204
        assert client.get(f"/api/locations/{created['id']}", headers=headers).status_code == 404

    def test_delete_forbidden(self, client, headers):
        created = create(client, headers)
        response = client.delete(f"/api/locations/{created['id']}")
        assert response.status_code == 403
