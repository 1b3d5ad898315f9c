"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import create_supabase_client, create_supabase_anon_client
from tests.conftest import make_settings


class TestSupabaseClient:
    @patch("shared.database.create_client")
    def test_create_supabase_client_uses_service_role(self, mock_create):
        """Should create client with service role key."""
        mock_create.return_value = MagicMock()
        settings = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
        )

        client = create_supabase_client(settings)

        mock_create.assert_called_once_with("https://test.supabase.co", "service-key")
        assert client is mock_create.return_value

    def test_create_supabase_client_raises_without_config(self):
        """Should raise if configuration is missing."""
        with pytest.raises(RuntimeError, match="PORTAL_SUPABASE_SERVICE_ROLE_KEY"):
            create_supabase_client(make_settings(supabase_url="https://test.supabase.co"))

    @patch("shared.database.create_client")
    def test_create_anon_client_uses_anon_key(self, mock_create):
        settings = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_anon_key="anon-key",
        )

        create_supabase_anon_client(settings)

        args, kwargs = mock_create.call_args
        assert args == ("https://test.supabase.co", "anon-key")
        assert kwargs["options"].persist_session is False
        assert kwargs["options"].auto_refresh_token is False

    def test_create_anon_client_raises_without_config(self):
        with pytest.raises(RuntimeError, match="PORTAL_SUPABASE_ANON_KEY"):
            create_supabase_anon_client(make_settings())
