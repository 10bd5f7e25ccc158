"""
Health check endpoints.

Provides the liveness probe and the scheduled keep-alive ping that stops the
hosted database from pausing on inactivity.
"""

import hmac
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from modules.widgets.repository import WidgetRepository
from ..dependencies import get_widget_repository

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class KeepAliveResponse(BaseModel):
    """Keep-alive ping result."""

    success: bool
    timestamp: datetime
    count: int
    message: str = "Supabase pinged successfully"


def _cron_authorized(authorization: Optional[str]) -> bool:
    secret = get_settings().cron_secret
    if not secret or not authorization:
        return False
    return hmac.compare_digest(authorization, f"Bearer {secret}")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/cron/keep-alive", response_model=KeepAliveResponse)
async def keep_alive(
    authorization: Optional[str] = Header(default=None),
    widgets: WidgetRepository = Depends(get_widget_repository),
):
    """
    Run a lightweight count query against the database.

    The Authorization header must be exactly "Bearer <CRON_SECRET>". With no
    secret configured every request is rejected.
    """
    if not _cron_authorized(authorization):
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        count = widgets.count_all()
    except Exception as e:
        logger.error(f"Keep-alive error: {e}")
        return JSONResponse({"success": False, "error": str(e) or "Unknown error"}, status_code=500)

    logger.info(f"Keep-alive ping successful. Widget configs count: {count}")
    return KeepAliveResponse(
        success=True,
        timestamp=datetime.now(timezone.utc),
        count=count,
    )
