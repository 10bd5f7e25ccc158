"""
Role and profile repositories.

Tables:
- user_roles (user_id, role): zero or more role assignments per account
- profiles (user_id, email, full_name, avatar_url, retell_api_key, ...)
"""

import logging
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Profile, Role

logger = logging.getLogger(__name__)


class RoleRepository(BaseRepository[Role]):
    """Data access for role assignments."""

    def list_roles(self, user_id: str) -> list[Role]:
        """
        Get every role assigned to an account.

        Unknown role tags are skipped with a warning.
        """
        result = self._db.table("user_roles").select("role").eq("user_id", user_id).execute()

        roles: list[Role] = []
        for row in result.data or []:
            try:
                roles.append(Role(row["role"]))
            except ValueError:
                logger.warning(f"Ignoring unknown role tag {row['role']!r} for user {user_id}")
        return roles

    def assign_role(self, user_id: str, role: Role) -> None:
        """Insert a role assignment."""
        self._db.table("user_roles").insert({"user_id": user_id, "role": role.value}).execute()

    def count_by_role(self, role: Role) -> int:
        """Count assignments of a role across all accounts."""
        result = (
            self._db.table("user_roles")
            .select("*", count="exact", head=True)
            .eq("role", role.value)
            .execute()
        )
        return result.count or 0


class ProfileRepository(BaseRepository[Profile]):
    """Data access for account profiles."""

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Get a profile by owning user ID."""
        result = self._db.table("profiles").select("*").eq("user_id", user_id).limit(1).execute()
        row = self._first(result)
        return self._map_to_profile(row) if row else None

    def get_provider_api_key(self, user_id: str) -> Optional[str]:
        """Get the account's global provider API key, if one is set."""
        result = (
            self._db.table("profiles")
            .select("retell_api_key")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return row.get("retell_api_key") if row else None

    def save_provider_api_key(self, user_id: str, api_key: Optional[str]) -> None:
        """Set or clear the account's global provider API key."""
        self._db.table("profiles").update({"retell_api_key": api_key}).eq("user_id", user_id).execute()

    def count_profiles(self) -> int:
        """Count all registered profiles."""
        result = self._db.table("profiles").select("*", count="exact", head=True).execute()
        return result.count or 0

    def _map_to_profile(self, data: dict[str, Any]) -> Profile:
        return Profile(
            user_id=str(data["user_id"]),
            email=data.get("email"),
            full_name=data.get("full_name"),
            avatar_url=data.get("avatar_url"),
            retell_api_key=data.get("retell_api_key"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class AccountRepository(BaseRepository[str]):
    """Auth user management through the Supabase admin API."""

    def create_user(self, email: str, password: str, full_name: Optional[str] = None) -> str:
        """
        Create a confirmed auth user and return its ID.

        Raises:
            AuthApiError: If Supabase rejects the user (e.g. email taken)
        """
        response = self._db.auth.admin.create_user({
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {"full_name": full_name or email.split("@")[0]},
        })
        return response.user.id
