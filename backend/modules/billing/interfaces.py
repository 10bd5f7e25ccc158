"""
Billing module interface.

Other modules should depend on IBillingService, not the concrete implementation.
This lets the widgets module gate creation on the resolved quota without
knowing about Stripe.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from .models import SubscriptionSnapshot, SubscriptionTier


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for entitlement resolution and subscription management.
    """

    async def resolve_snapshot(self, user: AuthenticatedUser) -> SubscriptionSnapshot:
        """
        Resolve the account's subscription snapshot.

        Admin accounts short-circuit without contacting the billing provider.

        Raises:
            BillingConfigurationError: If the Stripe key is missing
            BillingProviderError: If a Stripe call fails
        """
        ...

    async def resolve_snapshot_or_free(self, user: AuthenticatedUser) -> SubscriptionSnapshot:
        """
        Resolve the snapshot, falling back to the free tier on any failure.

        This is the caller-side fallback: it never raises.
        """
        ...

    async def create_checkout(self, user: AuthenticatedUser, tier: SubscriptionTier) -> str:
        """
        Start a Stripe Checkout for a paid tier.

        Returns:
            URL of the hosted checkout page
        """
        ...

    async def create_portal(self, user: AuthenticatedUser) -> str:
        """
        Open the Stripe customer portal.

        Raises:
            NoBillingCustomerError: If the account never checked out
        """
        ...
