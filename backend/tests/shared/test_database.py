"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.config import Settings
from shared.database import get_supabase_client, reset_client_cache
from shared.exceptions import ConfigurationError


def _settings(url="https://test.supabase.co", key="service-key"):
    return Settings(_env_file=None, supabase_url=url, supabase_service_role_key=key)


@pytest.fixture(autouse=True)
def fresh_client():
    reset_client_cache()
    yield
    reset_client_cache()


class TestSupabaseClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_uses_service_role_without_session(self, mock_settings, mock_create):
        mock_settings.return_value = _settings()
        mock_create.return_value = MagicMock()

        get_supabase_client()

        args, kwargs = mock_create.call_args
        assert args == ("https://test.supabase.co", "service-key")
        options = kwargs["options"]
        assert options.persist_session is False
        assert options.auto_refresh_token is False

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_client_is_created_once(self, mock_settings, mock_create):
        mock_settings.return_value = _settings()
        mock_create.return_value = MagicMock()

        assert get_supabase_client() is get_supabase_client()
        mock_create.assert_called_once()

    @pytest.mark.parametrize(
        "url,key,setting",
        [
            ("", "service-key", "SUPABASE_URL"),
            ("https://test.supabase.co", "", "SUPABASE_SERVICE_ROLE_KEY"),
            ("", "", "SUPABASE_URL"),
        ],
    )
    @patch("shared.database.get_settings")
    def test_missing_configuration(self, mock_settings, url, key, setting):
        mock_settings.return_value = _settings(url, key)

        with pytest.raises(ConfigurationError, match="SUPABASE_SERVICE_ROLE_KEY") as exc_info:
            get_supabase_client()
        assert exc_info.value.setting == setting

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        mock_settings.return_value = _settings()
        mock_create.side_effect = [MagicMock(name="first"), MagicMock(name="second")]

        first = get_supabase_client()
        reset_client_cache()
        second = get_supabase_client()

        assert first is not second
