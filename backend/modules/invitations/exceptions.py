"""
Invitations module exceptions.
"""

from shared.exceptions import ChatmateError, NotFoundError, ValidationError


class InvitationError(ChatmateError):
    """Base exception for invitation errors."""

    pass


class InvitationNotFoundError(NotFoundError):
    """Raised when no invitation matches a token or ID."""

    def __init__(self, ref: str):
        super().__init__(
            "Invalid invitation link",
            code="INVITATION_NOT_FOUND",
            details={"ref": ref},
        )


class InvitationExpiredError(ValidationError):
    """Raised when an invitation is past its expiry."""

    def __init__(self, invitation_id: str):
        super().__init__(
            "This invitation has expired. Please contact your administrator for a new one.",
            code="INVITATION_EXPIRED",
            details={"invitation_id": invitation_id},
        )


class InvitationAlreadyUsedError(ValidationError):
    """Raised when an invitation has already been accepted."""

    def __init__(self, invitation_id: str):
        super().__init__(
            "This invitation has already been used",
            code="INVITATION_ALREADY_USED",
            details={"invitation_id": invitation_id},
        )


class InvitationConflictError(ValidationError):
    """Raised when the email already has a pending invitation."""

    def __init__(self, email: str):
        super().__init__(
            "An active invitation already exists for this email",
            code="INVITATION_CONFLICT",
            details={"email": email},
        )


class AccountExistsError(InvitationError):
    """Raised when the invited email already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "An account with this email already exists. Please sign in.",
            code="ACCOUNT_EXISTS",
            details={"email": email},
        )
