#!/usr/bin/env python
"""
Run the Chatmate API server.

Usage:
    python run_api.py
    python run_api.py --reload            # Development mode
    python run_api.py --log-level debug

Unset secrets do not stop the server; the endpoints that need them fail
per request. They are listed at startup so a misconfigured deploy is
visible in the logs.
"""

import argparse
import logging

import uvicorn

from shared.config import Settings, get_settings

logger = logging.getLogger("run_api")

# Setting name -> what stops working without it
REQUIRED_SECRETS = {
    "supabase_url": "all database access",
    "supabase_service_role_key": "all database access",
    "supabase_jwt_secret": "dashboard authentication",
    "stripe_secret_key": "subscription checks (callers fall back to free)",
    "retell_api_key": "calls and text chat without a widget or profile key",
    "retell_agent_id": "calls from widgets without their own agent",
    "retell_text_agent_id": "text chat",
    "cron_secret": "the keep-alive endpoint",
}


def unset_secrets(settings: Settings) -> dict[str, str]:
    return {name: impact for name, impact in REQUIRED_SECRETS.items() if not getattr(settings, name)}


def main():
    parser = argparse.ArgumentParser(description="Run Chatmate API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--log-level", type=str, help="Override LOG_LEVEL")
    args = parser.parse_args()

    settings = get_settings()
    log_level = (args.log_level or settings.log_level).lower()
    logging.basicConfig(level=log_level.upper())

    for name, impact in unset_secrets(settings).items():
        logger.warning(f"{name.upper()} is not set; affects {impact}")

    uvicorn.run(
        "api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
