"""
Demo settings repository.

Table:
- demo_settings (retell_api_key, voice_agent_id): a single administratively
  configured row, read-only here.
"""

from typing import Optional

from shared.repository import BaseRepository
from .models import DemoSettings


class DemoSettingsRepository(BaseRepository[DemoSettings]):
    """Read access to the demo widget's override row."""

    def get(self) -> Optional[DemoSettings]:
        result = (
            self._db.table("demo_settings")
            .select("retell_api_key, voice_agent_id")
            .limit(1)
            .execute()
        )
        row = self._first(result)
        if row is None:
            return None
        return DemoSettings(
            retell_api_key=row.get("retell_api_key"),
            voice_agent_id=row.get("voice_agent_id"),
        )
