"""
Widgets module exceptions.
"""

from typing import Optional

from shared.exceptions import ChatmateError, NotFoundError, ValidationError, AuthorizationError


class WidgetError(ChatmateError):
    """Base exception for widget-related errors."""

    pass


class WidgetNotFoundError(NotFoundError):
    """Raised when a widget is not found."""

    def __init__(self, widget_id: str):
        super().__init__(
            f"Widget not found: {widget_id}",
            code="WIDGET_NOT_FOUND",
            details={"widget_id": widget_id},
        )


class WidgetAccessDeniedError(AuthorizationError):
    """Raised when a user touches a widget they do not own."""

    def __init__(self, widget_id: str, user_id: str):
        super().__init__(
            f"Access denied to widget: {widget_id}",
            code="WIDGET_ACCESS_DENIED",
            details={"widget_id": widget_id, "user_id": user_id},
        )


class WidgetLimitReachedError(ValidationError):
    """Raised when creating a widget would exceed the account's quota."""

    def __init__(self, count: int, limit: Optional[int], tier: str):
        super().__init__(
            f"Widget limit reached ({count}/{limit}). Upgrade your plan to create more widgets.",
            code="WIDGET_LIMIT_REACHED",
            details={"count": count, "limit": limit, "tier": tier},
        )
