from modules.billing.exceptions import (
    BillingConfigurationError,
    BillingProviderError,
    NoBillingCustomerError,
    UnpurchasableTierError,
)
from shared.exceptions import ConfigurationError, ExternalServiceError, NotFoundError, ValidationError


class TestBillingExceptions:
    def test_configuration_error(self):
        error = BillingConfigurationError("STRIPE_SECRET_KEY", "STRIPE_SECRET_KEY is not set")
        assert isinstance(error, ConfigurationError)
        assert error.message == "STRIPE_SECRET_KEY is not set"
        assert error.setting == "STRIPE_SECRET_KEY"

    def test_provider_error(self):
        error = BillingProviderError("Failed to list subscriptions", "rate limited")
        assert isinstance(error, ExternalServiceError)
        assert error.service == "stripe"
        assert error.code == "BILLING_PROVIDER_ERROR"
        assert error.details["stripe_error"] == "rate limited"

    def test_provider_error_without_detail(self):
        error = BillingProviderError("Malformed subscription response")
        assert "stripe_error" not in error.details

    def test_no_customer(self):
        error = NoBillingCustomerError("a@x.com")
        assert isinstance(error, NotFoundError)
        assert error.details["email"] == "a@x.com"

    def test_unpurchasable_tier(self):
        error = UnpurchasableTierError("enterprise")
        assert isinstance(error, ValidationError)
        assert "enterprise" in error.message

    def test_package_exports_resolve(self):
        import modules.billing as billing

        assert all(hasattr(billing, name) for name in billing.__all__)
        assert "BillingError" not in billing.__all__
