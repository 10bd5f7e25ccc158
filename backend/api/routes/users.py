"""
User-related endpoints.

Provides endpoints for the current account's profile and its global
provider API key.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, EmailStr, Field

from modules.auth.interfaces import IAuthService
from modules.auth.exceptions import ProfileNotFoundError
from modules.auth.models import Role
from shared.models import AuthenticatedUser
from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: EmailStr
    email_verified: bool
    full_name: Optional[str] = None
    role: Role
    roles: list[Role]
    has_provider_key: bool


class ProviderKeyRequest(BaseModel):
    """Set the global provider key; null or empty clears it."""

    retell_api_key: Optional[str] = Field(None, description="Global Retell API key")


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfileResponse:
    """
    Get the current user's profile and roles.

    Requires authentication.
    """
    try:
        profile = await auth.get_profile(user.id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    access = await auth.get_access(user.id)

    return UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        full_name=profile.full_name or user.full_name,
        role=access.highest_role,
        roles=access.roles,
        has_provider_key=bool(profile.retell_api_key),
    )


@router.put("/me/provider-key", status_code=204)
async def update_provider_key(
    request: ProviderKeyRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> Response:
    """
    Set or clear the account-wide provider key.

    Widgets without their own key use this one.
    """
    await auth.save_provider_api_key(user.id, request.retell_api_key)
    return Response(status_code=204)
