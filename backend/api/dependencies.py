"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories share the single service-role Supabase client.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import AccountRepository, ProfileRepository, RoleRepository
    from modules.billing.interfaces import IBillingService
    from modules.widgets.interfaces import IWidgetService
    from modules.widgets.repository import WidgetRepository
    from modules.voice.interfaces import IVoiceService
    from modules.invitations.interfaces import IInvitationService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._role_repository: "RoleRepository | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._account_repository: "AccountRepository | None" = None
        self._widget_repository: "WidgetRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._billing_service: "IBillingService | None" = None
        self._widget_service: "IWidgetService | None" = None
        self._voice_service: "IVoiceService | None" = None
        self._invitation_service: "IInvitationService | None" = None

    @property
    def db(self) -> "Client":
        from shared.database import get_supabase_client
        return get_supabase_client()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def role_repository(self) -> "RoleRepository":
        if self._role_repository is None:
            from modules.auth.repository import RoleRepository
            self._role_repository = RoleRepository(self.db)
        return self._role_repository

    @property
    def profile_repository(self) -> "ProfileRepository":
        if self._profile_repository is None:
            from modules.auth.repository import ProfileRepository
            self._profile_repository = ProfileRepository(self.db)
        return self._profile_repository

    @property
    def account_repository(self) -> "AccountRepository":
        if self._account_repository is None:
            from modules.auth.repository import AccountRepository
            self._account_repository = AccountRepository(self.db)
        return self._account_repository

    @property
    def widget_repository(self) -> "WidgetRepository":
        if self._widget_repository is None:
            from modules.widgets.repository import WidgetRepository
            self._widget_repository = WidgetRepository(self.db)
        return self._widget_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.role_repository, self.profile_repository)
        return self._auth_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import BillingService
            from modules.billing.stripe_gateway import StripeGateway
            from shared.config import get_settings
            settings = get_settings()
            self._billing_service = BillingService(
                auth=self.auth,
                gateway=StripeGateway(settings.stripe_secret_key),
                settings=settings,
            )
        return self._billing_service

    @property
    def widgets(self) -> "IWidgetService":
        """Get the widget service instance."""
        if self._widget_service is None:
            from modules.widgets.service import WidgetService
            self._widget_service = WidgetService(self.widget_repository, self.billing)
        return self._widget_service

    @property
    def voice(self) -> "IVoiceService":
        """Get the voice service instance."""
        if self._voice_service is None:
            from modules.voice.credentials import CredentialResolver
            from modules.voice.repository import DemoSettingsRepository
            from modules.voice.retell_client import RetellClient
            from modules.voice.service import VoiceService
            from shared.config import get_settings
            settings = get_settings()
            resolver = CredentialResolver(
                widgets=self.widget_repository,
                profiles=self.profile_repository,
                demo=DemoSettingsRepository(self.db),
                settings=settings,
            )
            client = RetellClient(settings.retell_base_url, settings.retell_timeout_seconds)
            self._voice_service = VoiceService(resolver, client, settings)
        return self._voice_service

    @property
    def invitations(self) -> "IInvitationService":
        """Get the invitation service instance."""
        if self._invitation_service is None:
            from modules.invitations.repository import InvitationRepository
            from modules.invitations.service import InvitationService
            from shared.config import get_settings
            self._invitation_service = InvitationService(
                repository=InvitationRepository(self.db),
                roles=self.role_repository,
                accounts=self.account_repository,
                settings=get_settings(),
            )
        return self._invitation_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._role_repository = None
        self._profile_repository = None
        self._account_repository = None
        self._widget_repository = None
        self._auth_service = None
        self._billing_service = None
        self._widget_service = None
        self._voice_service = None
        self._invitation_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_widget_service() -> "IWidgetService":
    """FastAPI dependency for widget service."""
    return get_container().widgets


def get_voice_service() -> "IVoiceService":
    """FastAPI dependency for voice service."""
    return get_container().voice


def get_invitation_service() -> "IInvitationService":
    """FastAPI dependency for invitation service."""
    return get_container().invitations


def get_profile_repository() -> "ProfileRepository":
    """FastAPI dependency for the profile repository."""
    return get_container().profile_repository


def get_role_repository() -> "RoleRepository":
    """FastAPI dependency for the role repository."""
    return get_container().role_repository


def get_widget_repository() -> "WidgetRepository":
    """FastAPI dependency for the widget repository."""
    return get_container().widget_repository
