"""
Subscription API endpoints.

The check endpoint is the Entitlement Resolver's HTTP surface: every failure,
authentication included, comes back as {"error": message} with status 500.
Checkout and portal are ordinary dashboard endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service, get_billing_service
from api.middleware.auth import get_current_user
from modules.auth.interfaces import IAuthService
from shared.exceptions import ChatmateError
from shared.models import AuthenticatedUser

from .interfaces import IBillingService
from .models import CheckoutRequest, SessionUrlResponse, SubscriptionStatusResponse
from .exceptions import (
    BillingConfigurationError,
    BillingProviderError,
    NoBillingCustomerError,
    UnpurchasableTierError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    return authorization.removeprefix("Bearer ").strip() or None


@router.api_route("/check", methods=["GET", "POST"], response_model=SubscriptionStatusResponse)
async def check_subscription(
    authorization: Optional[str] = Header(default=None),
    auth: IAuthService = Depends(get_auth_service),
    service: IBillingService = Depends(get_billing_service),
):
    """
    Resolve the caller's subscription snapshot.

    Errors are not downgraded here; the dashboard falls back to the free tier
    when this endpoint fails.
    """
    try:
        user = await auth.validate_token(_bearer_token(authorization))
        snapshot = await service.resolve_snapshot(user)
    except ChatmateError as e:
        logger.error(f"Subscription check failed: {e.message}")
        return JSONResponse({"error": e.message}, status_code=500)
    except Exception as e:
        logger.exception("Subscription check failed")
        return JSONResponse({"error": str(e)}, status_code=500)

    return snapshot.to_response()


@router.post("/checkout", response_model=SessionUrlResponse)
async def create_checkout(
    request: CheckoutRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SessionUrlResponse:
    """Start a Stripe Checkout for the starter or pro tier."""
    try:
        url = await service.create_checkout(user, request.tier)
    except UnpurchasableTierError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except BillingConfigurationError as e:
        raise HTTPException(status_code=500, detail=e.message)
    except BillingProviderError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return SessionUrlResponse(url=url)


@router.post("/portal", response_model=SessionUrlResponse)
async def create_portal(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> SessionUrlResponse:
    """Open the Stripe customer portal."""
    try:
        url = await service.create_portal(user)
    except NoBillingCustomerError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BillingConfigurationError as e:
        raise HTTPException(status_code=500, detail=e.message)
    except BillingProviderError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return SessionUrlResponse(url=url)
