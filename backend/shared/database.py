"""
Supabase client factory.

Widget callers are anonymous, so the backend reads widget overrides, demo
settings and roles with the service role key and enforces ownership in
the service layer. The client never signs a user in.
"""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from .config import get_settings
from .exceptions import ConfigurationError


@lru_cache
def get_supabase_client() -> Client:
    """
    Service-role Supabase client, created once per process.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing
    """
    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            missing[0],
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables.",
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
            postgrest_client_timeout=settings.supabase_timeout_seconds,
        ),
    )


def reset_client_cache() -> None:
    """Drop the cached client so the next call reads settings again."""
    get_supabase_client.cache_clear()
