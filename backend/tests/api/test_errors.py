"""Tests for error handling and the strict identity policy."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from shared.store import InMemoryDocumentStore

from tests.conftest import auth_headers, create_instance_token, make_settings


class TestStrictMode:
    @pytest.fixture
    def settings(self):
        return make_settings(strict_auth=True)

    def test_missing_credential_reads_as_anonymous(self, client):
        response = client.get("/api/config")
        assert response.status_code == 200
        assert response.json()["auth"]["isAuthenticated"] is False

        info = client.get("/api/auth-info").json()
        assert info["instanceId"] is None
        assert info["trust"] == "absent"

    def test_invalid_credential(self, client):
        token = create_instance_token("tenant-1", secret="someone-elses-secret")
        response = client.get("/api/locations", headers=auth_headers(token))
        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_valid_credential(self, client, tenant_token):
        response = client.get("/api/config", headers=auth_headers(tenant_token, "comp-1"))
        assert response.status_code == 200

    def test_health_needs_no_credential(self, client):
        assert client.get("/api/health").status_code == 200


class TestMissingSecret:
    @pytest.fixture
    def settings(self):
        return make_settings(instance_secret="", require_instance_secret=True)

    def test_credential_without_secret(self, client, tenant_token):
        response = client.get("/api/config", headers=auth_headers(tenant_token))
        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "SERVER_CONFIGURATION"
        assert data["details"] == {"setting": "instance_secret"}


class TestUnverifiableMode:
    @pytest.fixture
    def settings(self):
        return make_settings(instance_secret="")

    def test_decodes_without_verification(self, client):
        token = create_instance_token("abc123", secret="any-secret")
        data = client.get("/api/auth-info", headers=auth_headers(token)).json()
        assert data["instanceId"] == "abc123"
        assert data["trust"] == "unverifiable"


class TestUnexpectedErrors:
    @pytest.fixture
    def store(self):
        store = MagicMock(spec=InMemoryDocumentStore)
        store.find.side_effect = KeyError("boom")
        return store

    def test_internal_error_hides_details(self, app, tenant_token):
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/locations", headers=auth_headers(tenant_token, "comp-1"))
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR", "details": {}}
