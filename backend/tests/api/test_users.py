"""Tests for user endpoints."""

from modules.auth.exceptions import ProfileNotFoundError
from modules.auth.models import Profile, Role
from tests.conftest import make_access


class TestCurrentUser:
    def test_profile_with_roles(self, client, mock_auth_service, auth_headers):
        mock_auth_service.get_profile.return_value = Profile(
            user_id="test-user-123", full_name="Test User", retell_api_key="key_1"
        )
        mock_auth_service.get_access.return_value = make_access("test-user-123", Role.MODERATOR, Role.ADMIN)

        response = client.get("/api/users/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["full_name"] == "Test User"
        assert data["role"] == "admin"
        assert data["has_provider_key"] is True
        assert "retell_api_key" not in data

    def test_missing_profile(self, client, mock_auth_service, auth_headers):
        mock_auth_service.get_profile.side_effect = ProfileNotFoundError("test-user-123")
        assert client.get("/api/users/me", headers=auth_headers).status_code == 404


class TestProviderKey:
    def test_set_key(self, client, mock_auth_service, auth_headers):
        response = client.put("/api/users/me/provider-key", json={"retell_api_key": "key_1"}, headers=auth_headers)

        assert response.status_code == 204
        mock_auth_service.save_provider_api_key.assert_awaited_once_with("test-user-123", "key_1")

    def test_clear_key(self, client, mock_auth_service, auth_headers):
        client.put("/api/users/me/provider-key", json={"retell_api_key": None}, headers=auth_headers)
        mock_auth_service.save_provider_api_key.assert_awaited_once_with("test-user-123", None)
