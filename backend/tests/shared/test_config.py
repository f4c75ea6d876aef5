"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Mapsy API"
        assert settings.port == 8001
        assert settings.cors_origins == ["*"]
        assert settings.store_backend == "supabase"
        assert settings.component_header == "X-Wix-Comp-Id"
        assert settings.config_key_prefix == "mapsy"
        assert settings.allow_global_default_fallback is False
        assert settings.max_image_bytes == 20 * 1024 * 1024

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {
            "STRICT_AUTH": "true",
            "INSTANCE_SECRET": "s3cret",
            "STORE_BACKEND": "memory",
        }):
            settings = Settings(_env_file=None)
            assert settings.strict_auth is True
            assert settings.instance_secret == "s3cret"
            assert settings.store_backend == "memory"

    def test_secret_required(self):
        assert Settings(_env_file=None).secret_required is False
        assert Settings(_env_file=None, strict_auth=True).secret_required is True
        assert Settings(_env_file=None, require_instance_secret=True).secret_required is True

    def test_uses_remote_storage(self):
        assert Settings(_env_file=None).uses_remote_storage is False
        assert Settings(_env_file=None, supabase_storage_bucket="images").uses_remote_storage is True


class TestGetSettings:
    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)
