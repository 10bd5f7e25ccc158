"""
Invitation repository for database access.

Table:
- user_invitations (id, email, role, token, invited_by, expires_at,
  accepted_at, created_at)
"""

import logging
from datetime import datetime
from typing import Any, Optional

from modules.auth.models import Role
from shared.repository import BaseRepository
from .models import Invitation

logger = logging.getLogger(__name__)

TABLE = "user_invitations"


class InvitationRepository(BaseRepository[Invitation]):
    """Data access for invitations. No authorization checks here."""

    def create(
        self,
        email: str,
        role: Role,
        token: str,
        invited_by: str,
        expires_at: datetime,
    ) -> Invitation:
        result = (
            self._db.table(TABLE)
            .insert({
                "email": email,
                "role": role.value,
                "token": token,
                "invited_by": invited_by,
                "expires_at": expires_at.isoformat(),
            })
            .execute()
        )
        return self._map_to_invitation(result.data[0])

    def get_by_token(self, token: str) -> Optional[Invitation]:
        result = self._db.table(TABLE).select("*").eq("token", token).limit(1).execute()
        row = self._first(result)
        return self._map_to_invitation(row) if row else None

    def get_by_id(self, invitation_id: str) -> Optional[Invitation]:
        result = self._db.table(TABLE).select("*").eq("id", invitation_id).limit(1).execute()
        row = self._first(result)
        return self._map_to_invitation(row) if row else None

    def list_pending(self, email: Optional[str] = None) -> list[Invitation]:
        """Invitations not yet accepted, most recent first."""
        query = self._db.table(TABLE).select("*").is_("accepted_at", "null")
        if email:
            query = query.eq("email", email)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_invitation(row) for row in result.data or []]

    def mark_accepted(self, invitation_id: str, accepted_at: datetime) -> bool:
        """
        Set accepted_at if it is still null.

        Returns:
            False if the invitation was already accepted
        """
        result = (
            self._db.table(TABLE)
            .update({"accepted_at": accepted_at.isoformat()})
            .eq("id", invitation_id)
            .is_("accepted_at", "null")
            .execute()
        )
        return bool(result.data)

    def delete(self, invitation_id: str) -> None:
        self._db.table(TABLE).delete().eq("id", invitation_id).execute()

    def _map_to_invitation(self, data: dict[str, Any]) -> Invitation:
        return Invitation(
            id=str(data["id"]),
            email=data["email"],
            role=Role(data.get("role") or Role.USER.value),
            token=data["token"],
            invited_by=data.get("invited_by"),
            expires_at=data["expires_at"],
            accepted_at=data.get("accepted_at"),
            created_at=data.get("created_at"),
        )
