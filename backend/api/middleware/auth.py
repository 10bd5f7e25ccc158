"""
JWT Authentication middleware.

Validates Supabase JWT tokens through the auth service and enforces roles.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.interfaces import IAuthService
from modules.auth.models import Role
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError as e:
        raise AuthError(e.message)


def require_role(role: Role):
    """
    Build a dependency that requires at least `role`.

    Usage:
        @router.get("/admin-only")
        async def admin_route(user: AuthenticatedUser = Depends(require_role(Role.ADMIN))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        auth: IAuthService = Depends(get_auth_service),
    ) -> AuthenticatedUser:
        access = await auth.get_access(user.id)
        if not access.highest_role.at_least(role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {role.value}",
            )
        return user

    return dependency

