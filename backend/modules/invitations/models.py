"""
Invitations module data models.

An invitation offers an email address an account with a pre-assigned role.
It is consumed exactly once: accepted_at, once set, is never cleared.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from modules.auth.models import Role

# Roles an admin may hand out; super admin is never granted by invitation
INVITABLE_ROLES = (Role.USER, Role.MODERATOR, Role.ADMIN)

PASSWORD_MIN_LENGTH = 8

_PASSWORD_RULES = [
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain a number"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain a special character"),
]


def password_problems(password: str) -> list[str]:
    """List every password rule the password breaks."""
    problems = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            problems.append(message)
    return problems


class Invitation(BaseModel):
    """A stored invitation."""

    id: str
    email: str
    role: Role
    token: str
    invited_by: Optional[str] = None
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_accepted(self) -> bool:
        return self.accepted_at is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at <= (now or datetime.now(timezone.utc))


class CreateInvitationRequest(BaseModel):
    """Request to invite an email address."""

    email: EmailStr
    role: Role = Role.USER

    @field_validator("role")
    @classmethod
    def role_is_invitable(cls, v: Role) -> Role:
        if v not in INVITABLE_ROLES:
            raise ValueError(f"Role cannot be granted by invitation: {v.value}")
        return v


class InvitationResponse(BaseModel):
    """Invitation as shown in the admin panel."""

    id: str
    email: str
    role: Role
    token: str
    expires_at: datetime
    created_at: Optional[datetime] = None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=invitation.id,
            email=invitation.email,
            role=invitation.role,
            token=invitation.token,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
        )


class InvitationValidationResponse(BaseModel):
    """What the accept page shows for a usable token."""

    email: str
    role: Role
    expires_at: datetime


class AcceptInvitationRequest(BaseModel):
    """Password chosen by the invitee."""

    password: str = Field(..., description="New account password")

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, v: str) -> str:
        problems = password_problems(v)
        if problems:
            raise ValueError(problems[0])
        return v


class AcceptInvitationResponse(BaseModel):
    """The account created from an invitation."""

    user_id: str
    email: str
    role: Role
