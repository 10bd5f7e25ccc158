"""
Invitations module.

Admins invite email addresses with a pre-assigned role; the invitee accepts
once with a password, which creates the account and grants the role.

Public API:
- IInvitationService: Interface for invitation operations
- Invitation: Stored invitation
- Invitation exceptions: InvitationAlreadyUsedError, etc.
"""

from .interfaces import IInvitationService
from .models import (
    INVITABLE_ROLES,
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    CreateInvitationRequest,
    Invitation,
    InvitationResponse,
    InvitationValidationResponse,
    password_problems,
)
from .exceptions import (
    InvitationError,
    InvitationNotFoundError,
    InvitationExpiredError,
    InvitationAlreadyUsedError,
    InvitationConflictError,
    AccountExistsError,
)

__all__ = [
    # Interface
    "IInvitationService",
    # Models
    "INVITABLE_ROLES",
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "CreateInvitationRequest",
    "Invitation",
    "InvitationResponse",
    "InvitationValidationResponse",
    "password_problems",
    # Exceptions
    "InvitationError",
    "InvitationNotFoundError",
    "InvitationExpiredError",
    "InvitationAlreadyUsedError",
    "InvitationConflictError",
    "AccountExistsError",
]
