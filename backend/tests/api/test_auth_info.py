"""Tests for the identity diagnostics endpoint."""

from tests.conftest import auth_headers, create_instance_token


class TestAuthInfo:
    def test_anonymous(self, client):
        data = client.get("/api/auth-info").json()
        assert data == {
            "instanceId": None,
            "compId": None,
            "instanceToken": None,
            "isAuthenticated": False,
            "trust": "absent",
        }

    def test_verified(self, client, tenant_token):
        data = client.get("/api/auth-info", headers=auth_headers(tenant_token, "comp-1")).json()
        assert data["instanceId"] == "tenant-1"
        assert data["compId"] == "comp-1"
        assert data["instanceToken"] == tenant_token
        assert data["isAuthenticated"] is True
        assert data["trust"] == "trusted"

    def test_bad_signature(self, client):
        token = create_instance_token("tenant-1", secret="someone-elses-secret")
        data = client.get("/api/auth-info", headers=auth_headers(token)).json()
        assert data["instanceId"] is None
        assert data["trust"] == "absent"
        assert data["isAuthenticated"] is True
