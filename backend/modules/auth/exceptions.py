"""
Authentication module exceptions.

Messages are returned to callers verbatim, so they describe the failure
without echoing token contents.
"""

from shared.exceptions import AuthenticationError, NotFoundError


class MissingTokenError(AuthenticationError):
    """No bearer token on the request."""

    def __init__(self, message: str = "No authorization header provided"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthenticationError):
    """Token failed verification, or the server cannot verify tokens at all."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(InvalidTokenError):
    def __init__(self):
        super().__init__("Authentication token has expired")
        self.code = "TOKEN_EXPIRED"


class ProfileNotFoundError(NotFoundError):
    """The account has no profiles row (e.g. sign-up trigger did not run)."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )
