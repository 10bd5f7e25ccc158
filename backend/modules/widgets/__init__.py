"""
Widgets module.

Manages embeddable widget configurations and gates creation on the
account's subscription quota.

Public API:
- IWidgetService: Interface for widget management
- WidgetConfig: Stored widget configuration
- Widget exceptions: WidgetLimitReachedError, etc.
"""

from .interfaces import IWidgetService
from .models import (
    WIDGET_KEY_PREFIX,
    CreateWidgetRequest,
    UpdateWidgetRequest,
    WidgetConfig,
    WidgetListResponse,
    WidgetPosition,
    WidgetResponse,
)
from .exceptions import (
    WidgetError,
    WidgetNotFoundError,
    WidgetAccessDeniedError,
    WidgetLimitReachedError,
)

__all__ = [
    # Interface
    "IWidgetService",
    # Models
    "WIDGET_KEY_PREFIX",
    "CreateWidgetRequest",
    "UpdateWidgetRequest",
    "WidgetConfig",
    "WidgetListResponse",
    "WidgetPosition",
    "WidgetResponse",
    # Exceptions
    "WidgetError",
    "WidgetNotFoundError",
    "WidgetAccessDeniedError",
    "WidgetLimitReachedError",
]
