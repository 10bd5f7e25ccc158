"""
Centralized configuration for the Chatmate backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., STRIPE_*, SUPABASE_*, RETELL_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Chatmate API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings (widgets are embedded on arbitrary customer sites)
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_timeout_seconds: float = 10.0

    # Stripe (loaded by billing module)
    stripe_secret_key: str = ""
    stripe_price_id_starter: str = ""
    stripe_price_id_pro: str = ""

    # Retell voice/chat provider
    retell_api_key: str = ""
    retell_agent_id: str = ""
    retell_text_agent_id: str = ""
    retell_base_url: str = "https://api.retellai.com"
    retell_timeout_seconds: float = 30.0

    # Frontend URLs (for checkout/portal redirects)
    frontend_url: str = "http://localhost:5173"

    # Keep-alive cron
    cron_secret: str = ""

    # Invitations
    invitation_ttl_days: int = 7


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
