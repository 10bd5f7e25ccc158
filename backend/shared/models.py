"""
Shared data models used across modules.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Caller identity taken from a verified Supabase access token.

    Only what the token itself asserts lives here. Roles and subscription
    tier change independently of the token and are resolved per request.
    """

    id: str = Field(..., description="Supabase auth user ID")
    email: EmailStr
    email_verified: bool = False
    full_name: Optional[str] = Field(None, description="Name given at sign-up (user_metadata.full_name)")
    last_sign_in: Optional[datetime] = None

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def display_name(self) -> str:
        return self.full_name or self.email.split("@")[0]
