"""Tests for the billing service (entitlement resolution)."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
from supabase import PostgrestAPIError

from modules.auth.models import Role
from modules.auth.service import AuthService
from modules.billing.service import BillingService, merge_subscriptions, tier_for_product
from modules.billing.models import (
    FREE_SNAPSHOT,
    BillingSubscription,
    SubscriptionStatus,
    SubscriptionTier,
)
from modules.billing.exceptions import (
    BillingConfigurationError,
    BillingProviderError,
    NoBillingCustomerError,
    UnpurchasableTierError,
)
from shared.config import Settings
from shared.models import AuthenticatedUser
from tests.conftest import make_access

STARTER_PRODUCT = "prod_TkuTSIcFmcYgaJ"
PRO_PRODUCT = "prod_TkuTxbnkX61zsQ"
PERIOD_END = datetime(2025, 6, 30, tzinfo=timezone.utc)


def _subscription(sub_id="sub_1", status="active", product=PRO_PRODUCT):
    return BillingSubscription(
        id=sub_id,
        status=status,
        product_id=product,
        current_period_end=PERIOD_END,
    )


@pytest.fixture
def user():
    return AuthenticatedUser(id="user-123", email="test@example.com")


@pytest.fixture
def auth():
    auth = AsyncMock()
    auth.get_access.return_value = make_access("user-123")
    return auth


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.find_customer_id.return_value = "cus_123"
    gateway.list_subscriptions.return_value = []
    return gateway


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test",
        stripe_price_id_starter="price_starter",
        stripe_price_id_pro="price_pro",
        frontend_url="https://app.example.com",
    )


@pytest.fixture
def service(auth, gateway, settings):
    return BillingService(auth, gateway, settings)


def _by_status(active=(), trialing=()):
    """list_subscriptions side effect keyed on status."""
    def list_subscriptions(customer_id, status):
        return list(active) if status == SubscriptionStatus.ACTIVE else list(trialing)
    return list_subscriptions


class TestResolveSnapshot:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [Role.ADMIN, Role.SUPER_ADMIN])
    async def test_admin_short_circuits_without_stripe(self, service, auth, gateway, user, role):
        auth.get_access.return_value = make_access(user.id, Role.USER, role)

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.ADMIN
        assert snapshot.subscribed is True
        assert snapshot.is_admin is True
        assert snapshot.is_trialing is False
        assert snapshot.widget_quota.is_unlimited
        gateway.find_customer_id.assert_not_called()
        gateway.list_subscriptions.assert_not_called()

    @pytest.mark.asyncio
    async def test_moderator_is_billed_normally(self, service, auth, gateway, user):
        auth.get_access.return_value = make_access(user.id, Role.MODERATOR)
        gateway.find_customer_id.return_value = None

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.FREE
        gateway.find_customer_id.assert_called_once_with("test@example.com")

    @pytest.mark.asyncio
    async def test_no_customer_is_free(self, service, gateway, user):
        gateway.find_customer_id.return_value = None

        snapshot = await service.resolve_snapshot(user)

        assert snapshot == FREE_SNAPSHOT
        assert snapshot.subscribed is False
        gateway.list_subscriptions.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_role_lookup_falls_through_to_billing(self, gateway, settings, user):
        roles = MagicMock()
        roles.list_roles.side_effect = PostgrestAPIError({"message": "relation does not exist", "code": "42P01"})
        gateway.find_customer_id.return_value = None
        service = BillingService(AuthService(roles, MagicMock()), gateway, settings)

        snapshot = await service.resolve_snapshot(user)

        assert snapshot == FREE_SNAPSHOT
        gateway.find_customer_id.assert_called_once_with("test@example.com")

    @pytest.mark.asyncio
    async def test_role_transport_error_does_not_hide_subscription(self, service, auth, gateway, user):
        auth.get_access.side_effect = httpx.ConnectError("connection refused")
        gateway.list_subscriptions.side_effect = _by_status(active=[_subscription()])

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.PRO
        assert snapshot.is_admin is False

    @pytest.mark.asyncio
    async def test_customer_without_subscription_is_free(self, service, user):
        snapshot = await service.resolve_snapshot(user)
        assert snapshot.tier == SubscriptionTier.FREE
        assert snapshot.subscription_end is None
        assert snapshot.is_trialing is False

    @pytest.mark.asyncio
    async def test_active_pro_subscription(self, service, gateway, user):
        gateway.list_subscriptions.side_effect = _by_status(active=[_subscription()])

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.subscribed is True
        assert snapshot.tier == SubscriptionTier.PRO
        assert snapshot.widget_quota.limit == 200
        assert snapshot.subscription_end == PERIOD_END
        assert snapshot.is_trialing is False
        assert snapshot.is_admin is False

    @pytest.mark.asyncio
    async def test_trialing_subscription(self, service, gateway, user):
        gateway.list_subscriptions.side_effect = _by_status(
            trialing=[_subscription(status="trialing", product=STARTER_PRODUCT)]
        )

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.STARTER
        assert snapshot.widget_quota.limit == 50
        assert snapshot.is_trialing is True

    @pytest.mark.asyncio
    async def test_active_takes_precedence_over_trialing(self, service, gateway, user):
        gateway.list_subscriptions.side_effect = _by_status(
            active=[_subscription("sub_a")],
            trialing=[_subscription("sub_t", status="trialing", product=STARTER_PRODUCT)],
        )

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.PRO
        assert snapshot.is_trialing is False

    @pytest.mark.asyncio
    async def test_queries_both_statuses(self, service, gateway, user):
        await service.resolve_snapshot(user)

        statuses = [c.args[1] for c in gateway.list_subscriptions.call_args_list]
        assert statuses == [SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIALING]

    @pytest.mark.asyncio
    async def test_unknown_product_is_free_tier(self, service, gateway, user):
        gateway.list_subscriptions.side_effect = _by_status(active=[_subscription(product="prod_unknown")])

        snapshot = await service.resolve_snapshot(user)

        assert snapshot.tier == SubscriptionTier.FREE
        assert snapshot.widget_quota.limit == 5
        assert snapshot.subscribed is True

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, service, gateway, user):
        gateway.find_customer_id.side_effect = BillingProviderError("Failed to look up billing customer")
        with pytest.raises(BillingProviderError):
            await service.resolve_snapshot(user)


class TestResolveSnapshotOrFree:
    @pytest.mark.asyncio
    async def test_falls_back_to_free_on_error(self, service, gateway, user):
        gateway.find_customer_id.side_effect = BillingConfigurationError("STRIPE_SECRET_KEY")
        assert await service.resolve_snapshot_or_free(user) == FREE_SNAPSHOT

    @pytest.mark.asyncio
    async def test_falls_back_on_unexpected_error(self, service, auth, user):
        auth.get_access.side_effect = RuntimeError("database down")
        assert await service.resolve_snapshot_or_free(user) == FREE_SNAPSHOT

    @pytest.mark.asyncio
    async def test_returns_resolved_snapshot(self, service, gateway, user):
        gateway.list_subscriptions.side_effect = _by_status(active=[_subscription()])
        snapshot = await service.resolve_snapshot_or_free(user)
        assert snapshot.tier == SubscriptionTier.PRO


class TestCheckout:
    @pytest.mark.asyncio
    async def test_creates_checkout_for_pro(self, service, gateway, user):
        gateway.get_or_create_customer.return_value = "cus_123"
        gateway.create_checkout_session.return_value = "https://checkout.stripe.com/c/1"

        url = await service.create_checkout(user, SubscriptionTier.PRO)

        assert url == "https://checkout.stripe.com/c/1"
        gateway.create_checkout_session.assert_called_once_with(
            customer_id="cus_123",
            price_id="price_pro",
            success_url="https://app.example.com/dashboard?checkout=success",
            cancel_url="https://app.example.com/dashboard?checkout=canceled",
            user_id="user-123",
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tier", [SubscriptionTier.FREE, SubscriptionTier.ENTERPRISE, SubscriptionTier.ADMIN])
    async def test_rejects_unpurchasable_tiers(self, service, gateway, user, tier):
        with pytest.raises(UnpurchasableTierError):
            await service.create_checkout(user, tier)
        gateway.get_or_create_customer.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_price_id(self, auth, gateway, user):
        service = BillingService(auth, gateway, Settings(_env_file=None, stripe_price_id_starter=""))
        with pytest.raises(BillingConfigurationError) as exc_info:
            await service.create_checkout(user, SubscriptionTier.STARTER)
        assert exc_info.value.setting == "STRIPE_PRICE_ID_STARTER"


class TestPortal:
    @pytest.mark.asyncio
    async def test_opens_portal(self, service, gateway, user):
        gateway.create_portal_session.return_value = "https://billing.stripe.com/p/1"

        url = await service.create_portal(user)

        assert url == "https://billing.stripe.com/p/1"
        gateway.create_portal_session.assert_called_once_with(
            "cus_123",
            return_url="https://app.example.com/dashboard",
        )

    @pytest.mark.asyncio
    async def test_no_customer(self, service, gateway, user):
        gateway.find_customer_id.return_value = None
        with pytest.raises(NoBillingCustomerError):
            await service.create_portal(user)


class TestHelpers:
    def test_merge_drops_duplicates(self):
        merged = merge_subscriptions(
            [_subscription("sub_1")],
            [_subscription("sub_1", status="trialing"), _subscription("sub_2", status="trialing")],
        )
        assert [s.id for s in merged] == ["sub_1", "sub_2"]
        assert merged[0].status == "active"

    def test_tier_for_product(self):
        assert tier_for_product(PRO_PRODUCT) == SubscriptionTier.PRO
        assert tier_for_product("prod_other") == SubscriptionTier.FREE
        assert tier_for_product(None) == SubscriptionTier.FREE
