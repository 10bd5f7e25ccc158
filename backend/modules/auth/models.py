"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    """
    Role tags, ordered by privilege.

    SUPER_ADMIN > ADMIN > MODERATOR > USER. USER is implicit: an account
    without any role assignment is a plain user.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"

    @property
    def rank(self) -> int:
        """Numeric privilege level; higher is more privileged."""
        return _ROLE_RANKS[self]

    def at_least(self, other: "Role") -> bool:
        """Whether this role grants everything `other` grants."""
        return self.rank >= other.rank


_ROLE_RANKS = {
    Role.USER: 0,
    Role.MODERATOR: 1,
    Role.ADMIN: 2,
    Role.SUPER_ADMIN: 3,
}


def highest_role(roles: Iterable[Role]) -> Role:
    """
    Pick the highest-priority role from a set of assignments.

    Returns Role.USER when there are no assignments.
    """
    return max(roles, key=lambda role: role.rank, default=Role.USER)


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")

    # Supabase-specific claims
    app_metadata: Optional[dict[str, Any]] = None
    user_metadata: Optional[dict[str, Any]] = None


class UserAccess(BaseModel):
    """Role assignments of an account, resolved for a single request."""

    user_id: str
    roles: list[Role] = Field(default_factory=list)
    highest_role: Role = Role.USER

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        """Admins and super admins."""
        return self.highest_role.at_least(Role.ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return self.highest_role == Role.SUPER_ADMIN

    @classmethod
    def from_roles(cls, user_id: str, roles: Iterable[Role]) -> "UserAccess":
        roles = list(dict.fromkeys(roles))
        return cls(user_id=user_id, roles=roles, highest_role=highest_role(roles))


class Profile(BaseModel):
    """
    Account profile row.

    `retell_api_key` is the account's global voice-provider key override,
    used by every widget of the account that has no key of its own.
    """

    user_id: str = Field(..., description="Owning auth user ID")
    email: Optional[str] = Field(None, description="Email address")
    full_name: Optional[str] = Field(None, description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    retell_api_key: Optional[str] = Field(None, description="Global provider API key")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
