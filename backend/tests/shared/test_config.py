"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Residence Portal API"
        assert settings.environment == "production"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.backend == "supabase"
        assert settings.max_upload_bytes == 5 * 1024 * 1024
        assert settings.default_page_size == 100
        assert settings.dev_token_bypass is False
        assert settings.dev_token_prefix == "simulated_token_"

    def test_loads_from_env(self):
        """Settings should load PORTAL_-prefixed environment variables."""
        with patch.dict(os.environ, {"PORTAL_DEBUG": "true", "PORTAL_PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_ignores_unprefixed_env(self):
        """Unprefixed variables belong to other programs."""
        with patch.dict(os.environ, {"PORT": "9999"}):
            settings = Settings(_env_file=None)
            assert settings.port == 8000

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "PORTAL_SUPABASE_URL": "https://test.supabase.co",
            "PORTAL_SUPABASE_ANON_KEY": "test-anon-key",
            "PORTAL_SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_service_role_key == "test-service-key"


class TestDevTokenBypass:
    def test_allowed_in_development(self):
        settings = Settings(_env_file=None, environment="development", dev_token_bypass=True)
        assert settings.dev_bypass_active is True

    @pytest.mark.parametrize("environment", ["production", "staging", "test"])
    def test_refused_outside_development(self, environment):
        """Enabling the bypass outside development must stop the process from starting."""
        with pytest.raises(ValueError, match="dev_token_bypass"):
            Settings(_env_file=None, environment=environment, dev_token_bypass=True)

    def test_refused_from_env(self):
        with patch.dict(os.environ, {"PORTAL_DEV_TOKEN_BYPASS": "true"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)

    def test_inactive_without_flag(self):
        settings = Settings(_env_file=None, environment="development")
        assert settings.is_development is True
        assert settings.dev_bypass_active is False


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
