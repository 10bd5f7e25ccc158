"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, Optional, TypeVar, Generic

import httpx
from supabase import Client, PostgrestAPIError


T = TypeVar("T")

# A failed query or a transport failure on a single lookup
LOOKUP_ERRORS = (PostgrestAPIError, httpx.HTTPError)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class WidgetRepository(BaseRepository[WidgetConfig]):
            def get_by_id(self, widget_id: str) -> Optional[WidgetConfig]:
                result = self._db.table("widget_configs").select("*").eq("id", widget_id).execute()
                row = self._first(result)
                return self._map_to_widget(row) if row else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a query result, or None when empty."""
        if result is None or not result.data:
            return None
        return result.data[0]
