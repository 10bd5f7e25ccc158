"""
Credential resolution for voice calls.

Given a public widget key or the demo flag, decides which provider API key
and which agent to use. Each field is resolved independently through an
override chain:

- widget: widget key -> owner's global key -> default; widget agent -> default
- demo: demo key -> default; demo agent -> default
- neither: defaults only

A failed lookup is logged and treated as "not found", so resolution falls
through to the next level. An empty result after the chain is a hard
failure: nothing is ever sent to the provider without both values.
"""

import logging
from typing import Callable, Optional, TypeVar

from shared.config import Settings
from shared.override import OverrideChain
from shared.repository import LOOKUP_ERRORS
from modules.auth.repository import ProfileRepository
from modules.widgets.models import WidgetConfig
from modules.widgets.repository import WidgetRepository

from .models import CredentialSource, DemoSettings, ResolvedCredentials
from .repository import DemoSettingsRepository
from .exceptions import CredentialConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

class CredentialResolver:
    """Resolves the provider key and agent ID for one call request."""

    def __init__(
        self,
        widgets: WidgetRepository,
        profiles: ProfileRepository,
        demo: DemoSettingsRepository,
        settings: Settings,
    ):
        self._widgets = widgets
        self._profiles = profiles
        self._demo = demo
        self._settings = settings

    def resolve(self, widget_api_key: Optional[str] = None, is_demo: bool = False) -> ResolvedCredentials:
        """
        Resolve credentials for a call.

        Args:
            widget_api_key: Public key of the calling widget, if any
            is_demo: Whether the call comes from the public demo widget

        Returns:
            ResolvedCredentials with a non-empty key and agent

        Raises:
            CredentialConfigurationError: If the key or agent is still empty
        """
        api_key = OverrideChain[str]()
        agent_id = OverrideChain[str]()

        if widget_api_key:
            widget = self._lookup(
                lambda: self._widgets.get_by_api_key(widget_api_key),
                f"widget config for api_key {widget_api_key[:10]}...",
            )
            if widget is not None:
                self._add_widget_sources(widget, api_key, agent_id)
        elif is_demo:
            demo = self._lookup(self._demo.get, "demo settings")
            if demo is not None:
                self._add_demo_sources(demo, api_key, agent_id)

        api_key.add(self._settings.retell_api_key, CredentialSource.DEFAULT.value)
        agent_id.add(self._settings.retell_agent_id, CredentialSource.DEFAULT.value)

        key, key_source = api_key.resolve_with_source()
        if not key:
            logger.error("RETELL_API_KEY is not configured")
            raise CredentialConfigurationError("RETELL_API_KEY")

        agent, agent_source = agent_id.resolve_with_source()
        if not agent:
            logger.error("RETELL_AGENT_ID is not configured")
            raise CredentialConfigurationError("RETELL_AGENT_ID")

        logger.info(f"Using {key_source} provider key and {agent_source} agent {agent}")
        return ResolvedCredentials(
            api_key=key,
            agent_id=agent,
            api_key_source=CredentialSource(key_source),
            agent_id_source=CredentialSource(agent_source),
        )

    def _add_widget_sources(
        self,
        widget: WidgetConfig,
        api_key: OverrideChain[str],
        agent_id: OverrideChain[str],
    ) -> None:
        api_key.add(widget.retell_api_key, CredentialSource.WIDGET.value)
        api_key.add_lazy(
            lambda: self._lookup(
                lambda: self._profiles.get_provider_api_key(widget.user_id),
                f"profile of user {widget.user_id}",
            ),
            CredentialSource.PROFILE.value,
        )
        agent_id.add(widget.voice_agent_id, CredentialSource.WIDGET.value)

    def _add_demo_sources(
        self,
        demo: DemoSettings,
        api_key: OverrideChain[str],
        agent_id: OverrideChain[str],
    ) -> None:
        api_key.add(demo.retell_api_key, CredentialSource.DEMO.value)
        agent_id.add(demo.voice_agent_id, CredentialSource.DEMO.value)

    def _lookup(self, query: Callable[[], Optional[T]], what: str) -> Optional[T]:
        """Run a lookup; failures and misses both come back as None."""
        try:
            found = query()
        except LOOKUP_ERRORS as e:
            logger.error(f"Error fetching {what}: {e}")
            return None
        if found is None:
            logger.warning(f"No {what} found, falling back to defaults")
        return found
