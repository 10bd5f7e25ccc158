"""
Invitation service implementation.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from supabase import AuthApiError

from shared.config import Settings
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser
from modules.auth.repository import AccountRepository, RoleRepository

from .interfaces import IInvitationService
from .models import AcceptInvitationResponse, CreateInvitationRequest, Invitation
from .repository import InvitationRepository
from .exceptions import (
    AccountExistsError,
    InvitationAlreadyUsedError,
    InvitationConflictError,
    InvitationExpiredError,
    InvitationNotFoundError,
)

logger = logging.getLogger(__name__)


class InvitationService(IInvitationService):
    """Role invitations backed by the user_invitations table."""

    def __init__(
        self,
        repository: InvitationRepository,
        roles: RoleRepository,
        accounts: AccountRepository,
        settings: Settings,
    ):
        self._repository = repository
        self._roles = roles
        self._accounts = accounts
        self._settings = settings

    async def create_invitation(self, admin: AuthenticatedUser, request: CreateInvitationRequest) -> Invitation:
        email = request.email.lower()
        now = datetime.now(timezone.utc)

        # Expired pending invitations do not block a new one
        if any(not inv.is_expired(now) for inv in self._repository.list_pending(email)):
            raise InvitationConflictError(email)

        invitation = self._repository.create(
            email=email,
            role=request.role,
            token=secrets.token_urlsafe(32),
            invited_by=admin.id,
            expires_at=now + timedelta(days=self._settings.invitation_ttl_days),
        )
        logger.info(f"User {admin.id} invited {email} as {request.role.value}")
        return invitation

    async def list_pending(self) -> list[Invitation]:
        return self._repository.list_pending()

    async def cancel_invitation(self, invitation_id: str) -> None:
        if self._repository.get_by_id(invitation_id) is None:
            raise InvitationNotFoundError(invitation_id)
        self._repository.delete(invitation_id)
        logger.info(f"Cancelled invitation {invitation_id}")

    async def validate_token(self, token: str) -> Invitation:
        """
        Look up a usable invitation.

        An accepted invitation reports "already used" even after it expires.
        """
        invitation = self._repository.get_by_token(token)
        if invitation is None:
            raise InvitationNotFoundError(token)
        if invitation.is_accepted:
            raise InvitationAlreadyUsedError(invitation.id)
        if invitation.is_expired():
            raise InvitationExpiredError(invitation.id)
        return invitation

    async def accept_invitation(self, token: str, password: str) -> AcceptInvitationResponse:
        invitation = await self.validate_token(token)

        try:
            user_id = self._accounts.create_user(invitation.email, password)
        except AuthApiError as e:
            if "already" in str(e).lower():
                raise AccountExistsError(invitation.email)
            logger.error(f"Failed to create account for invitation {invitation.id}: {e}")
            raise ExternalServiceError(f"Failed to create account: {e}", service="supabase")

        self._roles.assign_role(user_id, invitation.role)

        if not self._repository.mark_accepted(invitation.id, datetime.now(timezone.utc)):
            logger.warning(f"Invitation {invitation.id} was accepted concurrently")

        logger.info(f"Invitation {invitation.id} accepted by user {user_id}")
        return AcceptInvitationResponse(
            user_id=str(user_id),
            email=invitation.email,
            role=invitation.role,
        )
