"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import Profile, UserAccess


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication and access operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and email

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def get_access(self, user_id: str) -> UserAccess:
        """
        Resolve the role assignments of an account.

        Args:
            user_id: Supabase user ID (UUID)

        Returns:
            UserAccess with all roles and the highest one
        """
        ...

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get an account's profile.

        Raises:
            ProfileNotFoundError: If no profile row exists
        """
        ...

    async def save_provider_api_key(self, user_id: str, api_key: Optional[str]) -> None:
        """Set (or clear with None) the account's global provider API key."""
        ...
