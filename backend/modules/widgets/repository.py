"""
Widget repository for database access.

Encapsulates all Supabase queries and data mapping for the widget_configs table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import WidgetConfig

TABLE = "widget_configs"


class WidgetRepository(BaseRepository[WidgetConfig]):
    """
    Repository for widget configuration data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    def get_by_api_key(self, api_key: str) -> Optional[WidgetConfig]:
        """Get a widget by its public API key."""
        result = self._db.table(TABLE).select("*").eq("api_key", api_key).limit(1).execute()
        row = self._first(result)
        return self._map_to_widget(row) if row else None

    def get_by_id(self, widget_id: str) -> Optional[WidgetConfig]:
        result = self._db.table(TABLE).select("*").eq("id", widget_id).limit(1).execute()
        row = self._first(result)
        return self._map_to_widget(row) if row else None

    def list_for_user(self, user_id: str) -> list[WidgetConfig]:
        """List an account's widgets, most recent first."""
        result = (
            self._db.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_widget(row) for row in result.data or []]

    def count_for_user(self, user_id: str) -> int:
        result = (
            self._db.table(TABLE)
            .select("*", count="exact", head=True)
            .eq("user_id", user_id)
            .execute()
        )
        return result.count or 0

    def count_all(self) -> int:
        """Count every widget across all accounts."""
        result = self._db.table(TABLE).select("*", count="exact", head=True).execute()
        return result.count or 0

    def create(self, user_id: str, name: str, api_key: str) -> WidgetConfig:
        """Insert a widget and return it with generated ID and timestamps."""
        result = (
            self._db.table(TABLE)
            .insert({"user_id": user_id, "name": name, "api_key": api_key})
            .execute()
        )
        return self._map_to_widget(result.data[0])

    def update(self, widget_id: str, data: dict[str, Any]) -> Optional[WidgetConfig]:
        result = self._db.table(TABLE).update(data).eq("id", widget_id).execute()
        row = self._first(result)
        return self._map_to_widget(row) if row else None

    def delete(self, widget_id: str) -> None:
        self._db.table(TABLE).delete().eq("id", widget_id).execute()

    def _map_to_widget(self, data: dict[str, Any]) -> WidgetConfig:
        """Map a database row to WidgetConfig."""
        return WidgetConfig(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            name=data.get("name") or "",
            api_key=data["api_key"],
            retell_api_key=data.get("retell_api_key"),
            voice_agent_id=data.get("voice_agent_id"),
            enable_voice=data.get("enable_voice") is not False,
            enable_chat=data.get("enable_chat") is not False,
            title=data.get("title"),
            greeting=data.get("greeting"),
            primary_color=data.get("primary_color"),
            position=data.get("position"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
