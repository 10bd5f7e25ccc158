"""
Widgets module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from .models import CreateWidgetRequest, UpdateWidgetRequest, WidgetConfig, WidgetListResponse


@runtime_checkable
class IWidgetService(Protocol):
    """
    Interface for widget management and the creation quota gate.
    """

    async def list_widgets(self, user: AuthenticatedUser) -> WidgetListResponse:
        """List the account's widgets together with its current quota."""
        ...

    async def create_widget(self, user: AuthenticatedUser, request: CreateWidgetRequest) -> WidgetConfig:
        """
        Create a widget if the freshly resolved quota allows one more.

        Raises:
            WidgetLimitReachedError: If count >= limit; nothing is written
        """
        ...

    async def update_widget(
        self,
        user: AuthenticatedUser,
        widget_id: str,
        request: UpdateWidgetRequest,
    ) -> WidgetConfig:
        """
        Update a widget owned by the account.

        Raises:
            WidgetNotFoundError: If the widget does not exist
            WidgetAccessDeniedError: If the account does not own it
        """
        ...

    async def delete_widget(self, user: AuthenticatedUser, widget_id: str) -> None:
        """
        Delete a widget owned by the account.

        Raises:
            WidgetNotFoundError: If the widget does not exist
            WidgetAccessDeniedError: If the account does not own it
        """
        ...
