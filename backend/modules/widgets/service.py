"""
Widget service implementation.

Owns widget CRUD and the creation quota gate. The gate reads the current
widget count and the freshly resolved subscription snapshot, then writes.
Two concurrent creations from the same account can both pass the check;
that overshoot is accepted.
"""

import logging
import secrets

from shared.models import AuthenticatedUser
from modules.billing.interfaces import IBillingService

from .interfaces import IWidgetService
from .models import (
    WIDGET_KEY_PREFIX,
    CreateWidgetRequest,
    UpdateWidgetRequest,
    WidgetConfig,
    WidgetListResponse,
    WidgetResponse,
)
from .repository import WidgetRepository
from .exceptions import (
    WidgetAccessDeniedError,
    WidgetLimitReachedError,
    WidgetNotFoundError,
)

logger = logging.getLogger(__name__)


def generate_widget_key() -> str:
    """Public widget key: prefix plus 48 hex characters."""
    return WIDGET_KEY_PREFIX + secrets.token_hex(24)


class WidgetService(IWidgetService):
    """Widget management backed by the widget_configs table."""

    def __init__(self, repository: WidgetRepository, billing: IBillingService):
        self._repository = repository
        self._billing = billing

    async def list_widgets(self, user: AuthenticatedUser) -> WidgetListResponse:
        widgets = self._repository.list_for_user(user.id)
        snapshot = await self._billing.resolve_snapshot_or_free(user)
        quota = snapshot.widget_quota
        return WidgetListResponse(
            widgets=[WidgetResponse.from_config(w) for w in widgets],
            total=len(widgets),
            widget_limit=None if quota.is_unlimited else quota.limit,
        )

    async def create_widget(self, user: AuthenticatedUser, request: CreateWidgetRequest) -> WidgetConfig:
        """Create a widget if the account is under its quota."""
        snapshot = await self._billing.resolve_snapshot_or_free(user)
        count = self._repository.count_for_user(user.id)

        if not snapshot.widget_quota.allows(count):
            logger.info(
                f"Widget creation refused for user {user.id}: "
                f"{count}/{snapshot.widget_quota.limit} on tier {snapshot.tier.value}"
            )
            raise WidgetLimitReachedError(count, snapshot.widget_quota.limit, snapshot.tier.value)

        widget = self._repository.create(user.id, request.name, generate_widget_key())
        logger.info(f"Created widget {widget.id} for user {user.id}")
        return widget

    async def update_widget(
        self,
        user: AuthenticatedUser,
        widget_id: str,
        request: UpdateWidgetRequest,
    ) -> WidgetConfig:
        widget = self._get_owned(user, widget_id)

        data = request.to_update()
        if not data:
            return widget

        updated = self._repository.update(widget_id, data)
        if updated is None:
            raise WidgetNotFoundError(widget_id)
        return updated

    async def delete_widget(self, user: AuthenticatedUser, widget_id: str) -> None:
        self._get_owned(user, widget_id)
        self._repository.delete(widget_id)
        logger.info(f"Deleted widget {widget_id} for user {user.id}")

    def _get_owned(self, user: AuthenticatedUser, widget_id: str) -> WidgetConfig:
        widget = self._repository.get_by_id(widget_id)
        if widget is None:
            raise WidgetNotFoundError(widget_id)
        if widget.user_id != user.id:
            raise WidgetAccessDeniedError(widget_id, user.id)
        return widget
