"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory service container, fake enrichment providers, and helpers for
minting instance credentials.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.identity.verifier import encode_instance_token
from providers.base import BlobStore, Coordinates, Geocoder, ImagePayload
from shared.config import Settings
from shared.exceptions import ExternalServiceError
from shared.store import InMemoryDocumentStore


# Test instance secret (only for testing)
TEST_INSTANCE_SECRET = "test-instance-secret-for-testing-only"


def create_instance_token(
    instance_id: str = "tenant-1",
    vendor_product_id: Optional[str] = None,
    secret: str = TEST_INSTANCE_SECRET,
    signature_first: bool = True,
) -> str:
    """
    Create a signed two-segment instance token.

    Args:
        instance_id: Tenant id to embed
        vendor_product_id: Optional purchase reference
        secret: Signing secret
        signature_first: Put the signature segment first

    Returns:
        Token string
    """
    claims = {"instanceId": instance_id}
    if vendor_product_id:
        claims["vendorProductId"] = vendor_product_id
    return encode_instance_token(claims, secret, signature_first=signature_first)


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {
        "store_backend": "memory",
        "instance_secret": TEST_INSTANCE_SECRET,
        "google_maps_api_key": "",
        "enrichment_timeout": 2.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeGeocoder(Geocoder):
    """Geocoder returning a fixed result and recording the addresses it saw."""

    def __init__(self, result: Optional[Coordinates] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.addresses: list[str] = []

    async def geocode(self, address: str) -> Optional[Coordinates]:
        self.addresses.append(address)
        if self.error is not None:
            raise self.error
        return self.result


class FakeBlobStore(BlobStore):
    """Blob store keeping uploads in a dict keyed by URL."""

    def __init__(self, fail_uploads: bool = False):
        self.fail_uploads = fail_uploads
        self.blobs: dict[str, ImagePayload] = {}
        self.deleted: list[str] = []

    async def upload(self, image: ImagePayload) -> str:
        if self.fail_uploads:
            raise ExternalServiceError("upload rejected", service="fake_storage")
        url = f"https://blobs.test/{len(self.blobs) + 1}_{image.filename}"
        self.blobs[url] = image
        return url

    async def delete(self, url: str) -> bool:
        self.deleted.append(url)
        return self.blobs.pop(url, None) is not None


@pytest.fixture(autouse=True)
def reset_container_singleton():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(Coordinates(latitude=40.7128, longitude=-74.0060))


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def container(settings, store, geocoder, blob_store) -> ServiceContainer:
    """Service container wired to in-memory and fake collaborators."""
    container = ServiceContainer(
        settings=settings,
        store=store,
        geocoder=geocoder,
        blob_store=blob_store,
    )
    set_container(container)
    return container


@pytest.fixture
def app(container):
    """Create a fresh app for each test."""
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def tenant_token() -> str:
    return create_instance_token("tenant-1")


def auth_headers(token: str, component_id: Optional[str] = None) -> dict[str, str]:
    """Authorization header plus optional component header."""
    headers = {"Authorization": f"Bearer {token}"}
    if component_id:
        headers["X-Wix-Comp-Id"] = component_id
    return headers
