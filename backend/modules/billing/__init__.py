"""
Billing module.

Resolves subscription entitlements from Stripe and opens Stripe-hosted
checkout and portal pages.

Public API:
- IBillingService: Interface for entitlement resolution
- SubscriptionSnapshot: Resolved billing state of an account
- SubscriptionTier / WidgetQuota: Tier enumeration and widget quota
- PRODUCT_TIERS / TIER_WIDGET_QUOTAS: Fixed lookup tables
- Billing exceptions: BillingProviderError, etc.
"""

from .interfaces import IBillingService
from .models import (
    FREE_SNAPSHOT,
    PRODUCT_TIERS,
    TIER_WIDGET_QUOTAS,
    SubscriptionSnapshot,
    SubscriptionStatusResponse,
    SubscriptionTier,
    WidgetQuota,
    quota_for_tier,
)
from .exceptions import (
    BillingConfigurationError,
    BillingProviderError,
    NoBillingCustomerError,
    UnpurchasableTierError,
)

__all__ = [
    # Interface
    "IBillingService",
    # Models
    "FREE_SNAPSHOT",
    "PRODUCT_TIERS",
    "TIER_WIDGET_QUOTAS",
    "SubscriptionSnapshot",
    "SubscriptionStatusResponse",
    "SubscriptionTier",
    "WidgetQuota",
    "quota_for_tier",
    # Exceptions
    "BillingConfigurationError",
    "BillingProviderError",
    "NoBillingCustomerError",
    "UnpurchasableTierError",
]
