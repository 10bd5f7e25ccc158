"""
Authentication module.

Handles JWT validation, role resolution and account profiles.

Public API:
- IAuthService: Interface for auth operations
- Role / highest_role: Ordered role enumeration
- UserAccess: Resolved role assignments of an account
- Profile: Account profile with the global provider API key
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import JWTPayload, Profile, Role, UserAccess, highest_role
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    ProfileNotFoundError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    "Profile",
    "Role",
    "UserAccess",
    "highest_role",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "ProfileNotFoundError",
]
