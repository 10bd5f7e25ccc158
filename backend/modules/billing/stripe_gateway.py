"""
Stripe gateway.

Thin wrapper over the Stripe API used by the billing service. Every Stripe
failure is wrapped into BillingProviderError; a missing secret key fails
before any call is made. Calls are single-attempt.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import stripe
from stripe import StripeError

from .exceptions import BillingConfigurationError, BillingProviderError
from .models import BillingSubscription, SubscriptionStatus

logger = logging.getLogger(__name__)


def _optional(obj: Any, key: str) -> Any:
    """Read a field that may be absent from a Stripe object."""
    try:
        return obj[key]
    except KeyError:
        return None


class StripeGateway:
    """
    Stripe customer, subscription and session operations.

    The secret key is passed per request instead of being set globally on
    the stripe module.
    """

    def __init__(self, api_key: str):
        self._api_key = api_key

    def _require_key(self) -> str:
        if not self._api_key:
            raise BillingConfigurationError(
                "STRIPE_SECRET_KEY",
                "STRIPE_SECRET_KEY is not set",
            )
        return self._api_key

    # =========================================================================
    # Customers
    # =========================================================================

    def find_customer_id(self, email: str) -> Optional[str]:
        """Get the ID of the first Stripe customer with this email, if any."""
        api_key = self._require_key()
        try:
            customers = stripe.Customer.list(email=email, limit=1, api_key=api_key)
        except StripeError as e:
            logger.error(f"Failed to look up Stripe customer: {e}")
            raise BillingProviderError("Failed to look up billing customer", str(e))

        if not customers.data:
            return None
        return customers.data[0]["id"]

    def get_or_create_customer(self, email: str, user_id: str) -> str:
        """Get the customer ID for an email, creating the customer if needed."""
        customer_id = self.find_customer_id(email)
        if customer_id:
            return customer_id

        try:
            customer = stripe.Customer.create(
                email=email,
                metadata={"user_id": user_id},
                api_key=self._require_key(),
            )
        except StripeError as e:
            logger.error(f"Failed to create Stripe customer: {e}")
            raise BillingProviderError("Failed to create billing customer", str(e))

        logger.info(f"Created Stripe customer {customer['id']} for user {user_id}")
        return customer["id"]

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def list_subscriptions(
        self,
        customer_id: str,
        status: SubscriptionStatus,
        limit: int = 1,
    ) -> list[BillingSubscription]:
        """List a customer's subscriptions with the given status."""
        api_key = self._require_key()
        try:
            subscriptions = stripe.Subscription.list(
                customer=customer_id,
                status=status.value,
                limit=limit,
                api_key=api_key,
            )
        except StripeError as e:
            logger.error(f"Failed to list {status.value} subscriptions for {customer_id}: {e}")
            raise BillingProviderError("Failed to list subscriptions", str(e))

        return [self._map_subscription(s) for s in subscriptions.data]

    # =========================================================================
    # Hosted pages
    # =========================================================================

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        user_id: str,
    ) -> str:
        """Create a subscription Checkout Session and return its URL."""
        api_key = self._require_key()
        try:
            session = stripe.checkout.Session.create(
                customer=customer_id,
                line_items=[{"price": price_id, "quantity": 1}],
                mode="subscription",
                success_url=success_url,
                cancel_url=cancel_url,
                metadata={"user_id": user_id},
                api_key=api_key,
            )
        except StripeError as e:
            logger.error(f"Failed to create checkout session: {e}")
            raise BillingProviderError("Failed to create checkout session", str(e))

        logger.info(f"Created checkout session {session['id']} for user {user_id}")
        return session["url"]

    def create_portal_session(self, customer_id: str, return_url: str) -> str:
        """Create a Billing Portal session and return its URL."""
        api_key = self._require_key()
        try:
            session = stripe.billing_portal.Session.create(
                customer=customer_id,
                return_url=return_url,
                api_key=api_key,
            )
        except StripeError as e:
            logger.error(f"Failed to create portal session: {e}")
            raise BillingProviderError("Failed to create portal session", str(e))

        return session["url"]

    # =========================================================================
    # Mapping
    # =========================================================================

    def _map_subscription(self, data: Any) -> BillingSubscription:
        """
        Map a Stripe subscription to BillingSubscription.

        The billed product comes from the first subscription item. Newer API
        versions carry current_period_end on the item instead of the
        subscription, so both are checked.
        """
        try:
            item = data["items"]["data"][0]
            product = item["price"]["product"]
            product_id = product if isinstance(product, str) else product["id"]
            period_end = _optional(data, "current_period_end") or _optional(item, "current_period_end")
            return BillingSubscription(
                id=data["id"],
                status=data["status"],
                product_id=product_id,
                current_period_end=(
                    datetime.fromtimestamp(period_end, tz=timezone.utc)
                    if period_end is not None
                    else None
                ),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise BillingProviderError("Malformed subscription response", str(e))
