"""
Billing module data models.

These models define the subscription snapshot returned by the entitlement
resolver and the fixed lookup tables shared with the billing provider.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SubscriptionTier(str, Enum):
    """User subscription tiers."""

    FREE = "free"
    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"
    ADMIN = "admin"


class SubscriptionStatus(str, Enum):
    """Stripe subscription statuses the resolver looks at."""

    ACTIVE = "active"
    TRIALING = "trialing"


class QuotaKind(str, Enum):
    UNLIMITED = "unlimited"
    BOUNDED = "bounded"


class WidgetQuota(BaseModel):
    """
    Number of widgets an account may own.

    Either unlimited or bounded by a non-negative limit. There is no
    numeric "infinity": callers must go through allows().
    """

    kind: QuotaKind
    limit: Optional[int] = Field(None, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def unlimited(cls) -> "WidgetQuota":
        return cls(kind=QuotaKind.UNLIMITED)

    @classmethod
    def bounded(cls, limit: int) -> "WidgetQuota":
        return cls(kind=QuotaKind.BOUNDED, limit=limit)

    @property
    def is_unlimited(self) -> bool:
        return self.kind == QuotaKind.UNLIMITED

    def allows(self, current_count: int) -> bool:
        """Whether one more widget may be created when `current_count` exist."""
        if self.is_unlimited:
            return True
        return current_count < (self.limit or 0)


# Stripe product ID -> tier
PRODUCT_TIERS: dict[str, SubscriptionTier] = {
    "prod_TkuTSIcFmcYgaJ": SubscriptionTier.STARTER,
    "prod_TkuTxbnkX61zsQ": SubscriptionTier.PRO,
}

# Tier -> widget quota
TIER_WIDGET_QUOTAS: dict[SubscriptionTier, WidgetQuota] = {
    SubscriptionTier.FREE: WidgetQuota.bounded(5),
    SubscriptionTier.STARTER: WidgetQuota.bounded(50),
    SubscriptionTier.PRO: WidgetQuota.bounded(200),
    SubscriptionTier.ENTERPRISE: WidgetQuota.unlimited(),
    SubscriptionTier.ADMIN: WidgetQuota.unlimited(),
}


def quota_for_tier(tier: SubscriptionTier) -> WidgetQuota:
    """Get the widget quota for a tier; unmapped tiers get the free quota."""
    return TIER_WIDGET_QUOTAS.get(tier, TIER_WIDGET_QUOTAS[SubscriptionTier.FREE])


class BillingSubscription(BaseModel):
    """The parts of a Stripe subscription the resolver needs."""

    id: str
    status: str
    product_id: Optional[str] = None
    current_period_end: Optional[datetime] = None


class SubscriptionSnapshot(BaseModel):
    """
    Resolved billing state of an account at a point in time.

    Computed fresh on every resolution and never persisted.
    """

    subscribed: bool = False
    tier: SubscriptionTier = SubscriptionTier.FREE
    widget_quota: WidgetQuota = Field(default_factory=lambda: quota_for_tier(SubscriptionTier.FREE))
    subscription_end: Optional[datetime] = None
    is_trialing: bool = False
    is_admin: bool = False

    model_config = {"frozen": True}

    def to_response(self) -> "SubscriptionStatusResponse":
        return SubscriptionStatusResponse(
            subscribed=self.subscribed,
            tier=self.tier,
            widget_limit=None if self.widget_quota.is_unlimited else self.widget_quota.limit,
            subscription_end=self.subscription_end,
            is_trialing=self.is_trialing,
            is_admin=self.is_admin,
        )


# Caller-side fallback when resolution fails
FREE_SNAPSHOT = SubscriptionSnapshot()


class SubscriptionStatusResponse(BaseModel):
    """API response for subscription checks. widget_limit is null when unlimited."""

    subscribed: bool
    tier: SubscriptionTier
    widget_limit: Optional[int] = Field(None, description="Widget quota; null means unlimited")
    subscription_end: Optional[datetime] = None
    is_trialing: bool = False
    is_admin: bool = False


class CheckoutRequest(BaseModel):
    """Request to start a subscription checkout."""

    tier: SubscriptionTier = Field(..., description="Tier to purchase (starter or pro)")


class SessionUrlResponse(BaseModel):
    """Stripe-hosted page to redirect the user to."""

    url: str
