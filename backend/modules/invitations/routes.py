"""
Invitation API endpoints.

Listing, creating and cancelling require an admin. The validate and accept
endpoints are public: the token itself is the credential.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from api.middleware.auth import require_role
from api.dependencies import get_invitation_service
from modules.auth.models import Role
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from .interfaces import IInvitationService
from .models import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    CreateInvitationRequest,
    InvitationResponse,
    InvitationValidationResponse,
)
from .exceptions import (
    AccountExistsError,
    InvitationAlreadyUsedError,
    InvitationConflictError,
    InvitationExpiredError,
    InvitationNotFoundError,
)

router = APIRouter()

require_admin = require_role(Role.ADMIN)


@router.get("", response_model=list[InvitationResponse])
async def list_invitations(
    admin: AuthenticatedUser = Depends(require_admin),
    service: IInvitationService = Depends(get_invitation_service),
) -> list[InvitationResponse]:
    """List pending invitations, most recent first."""
    invitations = await service.list_pending()
    return [InvitationResponse.from_invitation(inv) for inv in invitations]


@router.post("", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    request: CreateInvitationRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IInvitationService = Depends(get_invitation_service),
) -> InvitationResponse:
    try:
        invitation = await service.create_invitation(admin, request)
    except InvitationConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return InvitationResponse.from_invitation(invitation)


@router.delete("/{invitation_id}", status_code=204)
async def cancel_invitation(
    invitation_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IInvitationService = Depends(get_invitation_service),
) -> Response:
    try:
        await service.cancel_invitation(invitation_id)
    except InvitationNotFoundError:
        raise HTTPException(status_code=404, detail="Invitation not found")
    return Response(status_code=204)


@router.get("/{token}/validate", response_model=InvitationValidationResponse)
async def validate_invitation(
    token: str,
    service: IInvitationService = Depends(get_invitation_service),
) -> InvitationValidationResponse:
    try:
        invitation = await service.validate_token(token)
    except InvitationNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (InvitationAlreadyUsedError, InvitationExpiredError) as e:
        raise HTTPException(status_code=410, detail=e.message)
    return InvitationValidationResponse(
        email=invitation.email,
        role=invitation.role,
        expires_at=invitation.expires_at,
    )


@router.post("/{token}/accept", response_model=AcceptInvitationResponse, status_code=201)
async def accept_invitation(
    token: str,
    request: AcceptInvitationRequest,
    service: IInvitationService = Depends(get_invitation_service),
) -> AcceptInvitationResponse:
    """Create the invited account with the chosen password."""
    try:
        return await service.accept_invitation(token, request.password)
    except InvitationNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (InvitationAlreadyUsedError, InvitationExpiredError) as e:
        raise HTTPException(status_code=410, detail=e.message)
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)
