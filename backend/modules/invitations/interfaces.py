"""
Invitations module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from .models import AcceptInvitationResponse, CreateInvitationRequest, Invitation


@runtime_checkable
class IInvitationService(Protocol):
    """
    Interface for role invitations.

    Creation, listing and cancelling are admin operations; validation and
    acceptance are done by the unauthenticated invitee holding the token.
    """

    async def create_invitation(self, admin: AuthenticatedUser, request: CreateInvitationRequest) -> Invitation:
        """
        Invite an email address with a role.

        Raises:
            InvitationConflictError: If a usable invitation already exists
        """
        ...

    async def list_pending(self) -> list[Invitation]:
        """List invitations that have not been accepted."""
        ...

    async def cancel_invitation(self, invitation_id: str) -> None:
        """
        Delete an invitation.

        Raises:
            InvitationNotFoundError: If no such invitation exists
        """
        ...

    async def validate_token(self, token: str) -> Invitation:
        """
        Look up a usable invitation.

        Raises:
            InvitationNotFoundError: Unknown token
            InvitationAlreadyUsedError: Already accepted
            InvitationExpiredError: Past its expiry
        """
        ...

    async def accept_invitation(self, token: str, password: str) -> AcceptInvitationResponse:
        """
        Create the invited account and assign its role.

        Raises:
            InvitationAlreadyUsedError: Already accepted; nothing is written
            AccountExistsError: The email already has an account
        """
        ...
