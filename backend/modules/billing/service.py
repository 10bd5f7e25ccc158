"""
Billing service implementation.

Resolves subscription snapshots from role assignments and live Stripe
subscription state, and opens Stripe-hosted checkout and portal pages.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser
from shared.repository import LOOKUP_ERRORS
from modules.auth.interfaces import IAuthService

from .interfaces import IBillingService
from .models import (
    FREE_SNAPSHOT,
    PRODUCT_TIERS,
    BillingSubscription,
    SubscriptionSnapshot,
    SubscriptionStatus,
    SubscriptionTier,
    quota_for_tier,
)
from .exceptions import (
    BillingConfigurationError,
    NoBillingCustomerError,
    UnpurchasableTierError,
)
from .stripe_gateway import StripeGateway

logger = logging.getLogger(__name__)


ADMIN_SNAPSHOT = SubscriptionSnapshot(
    subscribed=True,
    tier=SubscriptionTier.ADMIN,
    widget_quota=quota_for_tier(SubscriptionTier.ADMIN),
    subscription_end=None,
    is_trialing=False,
    is_admin=True,
)


def merge_subscriptions(*groups: list[BillingSubscription]) -> list[BillingSubscription]:
    """Concatenate subscription lists in order, dropping repeated IDs."""
    seen: set[str] = set()
    merged: list[BillingSubscription] = []
    for group in groups:
        for subscription in group:
            if subscription.id not in seen:
                seen.add(subscription.id)
                merged.append(subscription)
    return merged


def tier_for_product(product_id: Optional[str]) -> SubscriptionTier:
    """Map a Stripe product to a tier; unknown products are free."""
    if product_id is None:
        return SubscriptionTier.FREE
    return PRODUCT_TIERS.get(product_id, SubscriptionTier.FREE)


class BillingService(IBillingService):
    """
    Entitlement resolver backed by Stripe.

    Stateless: every call recomputes the snapshot from scratch.
    """

    def __init__(
        self,
        auth: IAuthService,
        gateway: StripeGateway,
        settings: Optional[Settings] = None,
    ):
        self._auth = auth
        self._gateway = gateway
        self._settings = settings or get_settings()

    async def resolve_snapshot(self, user: AuthenticatedUser) -> SubscriptionSnapshot:
        """Resolve the subscription snapshot for an account."""
        if await self._has_admin_role(user):
            logger.debug(f"Admin short-circuit for user {user.id}")
            return ADMIN_SNAPSHOT

        customer_id = self._gateway.find_customer_id(user.email)
        if not customer_id:
            return FREE_SNAPSHOT

        subscriptions = merge_subscriptions(
            self._gateway.list_subscriptions(customer_id, SubscriptionStatus.ACTIVE),
            self._gateway.list_subscriptions(customer_id, SubscriptionStatus.TRIALING),
        )
        if not subscriptions:
            return FREE_SNAPSHOT

        subscription = subscriptions[0]
        tier = tier_for_product(subscription.product_id)
        if tier == SubscriptionTier.FREE:
            logger.warning(
                f"Unrecognized product {subscription.product_id} on subscription "
                f"{subscription.id}, treating as free tier"
            )

        return SubscriptionSnapshot(
            subscribed=True,
            tier=tier,
            widget_quota=quota_for_tier(tier),
            subscription_end=subscription.current_period_end,
            is_trialing=subscription.status == SubscriptionStatus.TRIALING.value,
            is_admin=False,
        )

    async def resolve_snapshot_or_free(self, user: AuthenticatedUser) -> SubscriptionSnapshot:
        """Resolve the snapshot; any failure degrades to the free tier."""
        try:
            return await self.resolve_snapshot(user)
        except Exception as e:
            logger.warning(f"Subscription check failed for user {user.id}, using free tier: {e}")
            return FREE_SNAPSHOT

    async def _has_admin_role(self, user: AuthenticatedUser) -> bool:
        """A role lookup that fails counts as no admin role."""
        try:
            access = await self._auth.get_access(user.id)
        except LOOKUP_ERRORS as e:
            logger.error(f"Error fetching roles for user {user.id}: {e}")
            return False
        return access.is_admin

    async def create_checkout(self, user: AuthenticatedUser, tier: SubscriptionTier) -> str:
        """Start a Stripe Checkout for the starter or pro tier."""
        price_ids = {
            SubscriptionTier.STARTER: ("STRIPE_PRICE_ID_STARTER", self._settings.stripe_price_id_starter),
            SubscriptionTier.PRO: ("STRIPE_PRICE_ID_PRO", self._settings.stripe_price_id_pro),
        }
        if tier not in price_ids:
            raise UnpurchasableTierError(tier.value)

        setting, price_id = price_ids[tier]
        if not price_id:
            raise BillingConfigurationError(setting)

        customer_id = self._gateway.get_or_create_customer(user.email, user.id)
        dashboard_url = f"{self._settings.frontend_url}/dashboard"
        return self._gateway.create_checkout_session(
            customer_id=customer_id,
            price_id=price_id,
            success_url=f"{dashboard_url}?checkout=success",
            cancel_url=f"{dashboard_url}?checkout=canceled",
            user_id=user.id,
        )

    async def create_portal(self, user: AuthenticatedUser) -> str:
        """Open the Stripe customer portal for an existing customer."""
        customer_id = self._gateway.find_customer_id(user.email)
        if not customer_id:
            raise NoBillingCustomerError(user.email)
        return self._gateway.create_portal_session(
            customer_id,
            return_url=f"{self._settings.frontend_url}/dashboard",
        )
