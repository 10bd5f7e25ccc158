"""
Widget API endpoints.

Dashboard CRUD for embeddable widgets. Creation is gated by the account's
subscription quota.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from api.middleware.auth import get_current_user
from api.dependencies import get_widget_service
from shared.models import AuthenticatedUser

from .interfaces import IWidgetService
from .models import CreateWidgetRequest, UpdateWidgetRequest, WidgetListResponse, WidgetResponse
from .exceptions import WidgetAccessDeniedError, WidgetLimitReachedError, WidgetNotFoundError

router = APIRouter()


@router.get("", response_model=WidgetListResponse)
async def list_widgets(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IWidgetService = Depends(get_widget_service),
) -> WidgetListResponse:
    """List the current user's widgets and widget quota."""
    return await service.list_widgets(user)


@router.post("", response_model=WidgetResponse, status_code=201)
async def create_widget(
    request: CreateWidgetRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IWidgetService = Depends(get_widget_service),
) -> WidgetResponse:
    """
    Create a new widget.

    Refused with 403 when the account already owns as many widgets as its
    tier allows.
    """
    try:
        widget = await service.create_widget(user, request)
    except WidgetLimitReachedError as e:
        raise HTTPException(status_code=403, detail=e.message)
    return WidgetResponse.from_config(widget)


@router.patch("/{widget_id}", response_model=WidgetResponse)
async def update_widget(
    widget_id: str,
    request: UpdateWidgetRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IWidgetService = Depends(get_widget_service),
) -> WidgetResponse:
    try:
        widget = await service.update_widget(user, widget_id, request)
    except (WidgetNotFoundError, WidgetAccessDeniedError):
        # Return 404 for both to avoid leaking existence
        raise HTTPException(status_code=404, detail="Widget not found")
    return WidgetResponse.from_config(widget)


@router.delete("/{widget_id}", status_code=204)
async def delete_widget(
    widget_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IWidgetService = Depends(get_widget_service),
) -> Response:
    try:
        await service.delete_widget(user, widget_id)
    except (WidgetNotFoundError, WidgetAccessDeniedError):
        raise HTTPException(status_code=404, detail="Widget not found")
    return Response(status_code=204)
