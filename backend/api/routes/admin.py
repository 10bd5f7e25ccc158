"""
Admin endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.models import Role
from modules.auth.repository import ProfileRepository, RoleRepository
from modules.widgets.repository import WidgetRepository
from shared.models import AuthenticatedUser
from ..dependencies import get_profile_repository, get_role_repository, get_widget_repository
from ..middleware.auth import require_role

router = APIRouter()


class AdminStatsResponse(BaseModel):
    """Platform-wide counts for the admin panel."""

    total_users: int
    total_widgets: int
    total_admins: int


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    user: AuthenticatedUser = Depends(require_role(Role.SUPER_ADMIN)),
    profiles: ProfileRepository = Depends(get_profile_repository),
    widgets: WidgetRepository = Depends(get_widget_repository),
    roles: RoleRepository = Depends(get_role_repository),
) -> AdminStatsResponse:
    """Count profiles, widgets and admin role assignments. Super admin only."""
    return AdminStatsResponse(
        total_users=profiles.count_profiles(),
        total_widgets=widgets.count_all(),
        total_admins=roles.count_by_role(Role.ADMIN),
    )
