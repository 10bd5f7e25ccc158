"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class BillingConfigurationError(ConfigurationError):
    """Raised when the Stripe secret key or a price ID is not configured."""

    pass


class BillingProviderError(ExternalServiceError):
    """Raised when a Stripe call fails or returns an unusable response."""

    def __init__(self, message: str, stripe_error: Optional[str] = None):
        super().__init__(
            message,
            service="stripe",
            code="BILLING_PROVIDER_ERROR",
            details={"stripe_error": stripe_error} if stripe_error else {},
        )


class NoBillingCustomerError(NotFoundError):
    """Raised when an account has no Stripe customer record."""

    def __init__(self, email: str):
        super().__init__(
            "No billing customer found for this account",
            code="NO_BILLING_CUSTOMER",
            details={"email": email},
        )


class UnpurchasableTierError(ValidationError):
    """Raised when checkout is requested for a tier that cannot be bought."""

    def __init__(self, tier: str):
        super().__init__(
            f"Tier cannot be purchased: {tier}",
            code="UNPURCHASABLE_TIER",
            details={"tier": tier},
        )
