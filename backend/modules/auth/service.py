"""
Authentication service implementation.

Validates Supabase JWT tokens and resolves role assignments and profiles.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload, Profile, UserAccess
from .repository import ProfileRepository, RoleRepository
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    ProfileNotFoundError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the Supabase
    database for roles and profiles.
    """

    def __init__(self, roles: RoleRepository, profiles: ProfileRepository):
        self._roles = roles
        self._profiles = profiles

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        secret = get_settings().supabase_jwt_secret
        if not secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Authentication error: {e}")

        jwt_payload = JWTPayload(**payload)
        if not jwt_payload.email:
            raise InvalidTokenError("User not authenticated or email not available")

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            email_verified=jwt_payload.email_confirmed_at is not None,
            full_name=(jwt_payload.user_metadata or {}).get("full_name"),
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
        )

    async def get_access(self, user_id: str) -> UserAccess:
        """Resolve role assignments; the highest one wins."""
        access = UserAccess.from_roles(user_id, self._roles.list_roles(user_id))
        logger.debug(f"Resolved role {access.highest_role.value} for user {user_id}")
        return access

    async def get_profile(self, user_id: str) -> Profile:
        profile = self._profiles.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def save_provider_api_key(self, user_id: str, api_key: Optional[str]) -> None:
        self._profiles.save_provider_api_key(user_id, api_key or None)
        logger.info(f"Updated global provider API key for user {user_id}")
