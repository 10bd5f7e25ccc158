"""Tests for invitation endpoints."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from api.dependencies import get_invitation_service
from modules.auth.models import Role
from modules.invitations.exceptions import (
    AccountExistsError,
    InvitationAlreadyUsedError,
    InvitationConflictError,
    InvitationExpiredError,
    InvitationNotFoundError,
)
from modules.invitations.models import AcceptInvitationResponse, Invitation
from shared.exceptions import ExternalServiceError
from tests.conftest import make_access


def _invitation():
    return Invitation(
        id="inv-1",
        email="new@example.com",
        role=Role.MODERATOR,
        token="tok_abc",
        invited_by="test-user-123",
        expires_at=datetime.now(timezone.utc) + timedelta(days=7),
    )


@pytest.fixture
def invitations(app):
    invitations = AsyncMock()
    app.dependency_overrides[get_invitation_service] = lambda: invitations
    return invitations


@pytest.fixture
def as_admin(mock_auth_service):
    mock_auth_service.get_access.return_value = make_access("test-user-123", Role.ADMIN)


class TestAdminEndpoints:
    def test_plain_user_forbidden(self, client, invitations, auth_headers):
        response = client.post("/api/invitations", json={"email": "new@example.com"}, headers=auth_headers)
        assert response.status_code == 403
        invitations.create_invitation.assert_not_called()

    def test_create(self, client, invitations, auth_headers, as_admin):
        invitations.create_invitation.return_value = _invitation()

        response = client.post(
            "/api/invitations",
            json={"email": "new@example.com", "role": "moderator"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["token"] == "tok_abc"

    def test_create_super_admin_rejected(self, client, invitations, auth_headers, as_admin):
        response = client.post(
            "/api/invitations",
            json={"email": "new@example.com", "role": "super_admin"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_create_conflict(self, client, invitations, auth_headers, as_admin):
        invitations.create_invitation.side_effect = InvitationConflictError("new@example.com")
        response = client.post("/api/invitations", json={"email": "new@example.com"}, headers=auth_headers)
        assert response.status_code == 409

    def test_list(self, client, invitations, auth_headers, as_admin):
        invitations.list_pending.return_value = [_invitation()]
        response = client.get("/api/invitations", headers=auth_headers)
        assert [i["id"] for i in response.json()] == ["inv-1"]

    def test_cancel(self, client, invitations, auth_headers, as_admin):
        assert client.delete("/api/invitations/inv-1", headers=auth_headers).status_code == 204

    def test_cancel_missing(self, client, invitations, auth_headers, as_admin):
        invitations.cancel_invitation.side_effect = InvitationNotFoundError("inv-404")
        assert client.delete("/api/invitations/inv-404", headers=auth_headers).status_code == 404


class TestPublicEndpoints:
    def test_validate(self, client, invitations):
        invitations.validate_token.return_value = _invitation()

        response = client.get("/api/invitations/tok_abc/validate")

        assert response.status_code == 200
        assert response.json()["email"] == "new@example.com"
        assert response.json()["role"] == "moderator"

    @pytest.mark.parametrize("error,status", [
        (InvitationNotFoundError("tok_x"), 404),
        (InvitationExpiredError("inv-1"), 410),
        (InvitationAlreadyUsedError("inv-1"), 410),
    ])
    def test_validate_errors(self, client, invitations, error, status):
        invitations.validate_token.side_effect = error
        assert client.get("/api/invitations/tok_x/validate").status_code == status

    def test_accept(self, client, invitations):
        invitations.accept_invitation.return_value = AcceptInvitationResponse(
            user_id="user-new", email="new@example.com", role=Role.MODERATOR
        )

        response = client.post("/api/invitations/tok_abc/accept", json={"password": "Sup3r$ecret"})

        assert response.status_code == 201
        assert response.json()["user_id"] == "user-new"
        invitations.accept_invitation.assert_awaited_once_with("tok_abc", "Sup3r$ecret")

    def test_accept_weak_password(self, client, invitations):
        response = client.post("/api/invitations/tok_abc/accept", json={"password": "weak"})
        assert response.status_code == 422
        invitations.accept_invitation.assert_not_called()

    @pytest.mark.parametrize("error,status", [
        (InvitationAlreadyUsedError("inv-1"), 410),
        (AccountExistsError("new@example.com"), 409),
        (ExternalServiceError("Failed to create account", service="supabase"), 502),
    ])
    def test_accept_errors(self, client, invitations, error, status):
        invitations.accept_invitation.side_effect = error
        response = client.post("/api/invitations/tok_abc/accept", json={"password": "Sup3r$ecret"})
        assert response.status_code == status
