"""
Voice and text-chat endpoints.

These are called from embedded widgets on arbitrary origins without a user
session. Failures come back as {"error": message}; only a missing chat
message is a client error.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_voice_service
from shared.exceptions import ChatmateError

from .interfaces import IVoiceService
from .models import ChatRequest, CreateCallRequest
from .exceptions import MissingMessageError

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


async def _json_body(request: Request) -> dict[str, Any]:
    """Request body as a dict; an empty or malformed body reads as {}."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


@router.options("/create-call")
@router.options("/text-chat")
async def preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/create-call")
async def create_call(
    request: Request,
    service: IVoiceService = Depends(get_voice_service),
):
    """
    Create a web call for a widget, the demo widget, or the defaults.

    Body: {"api_key"?: str, "is_demo"?: bool}. Returns {"access_token"}.
    """
    try:
        call_request = CreateCallRequest(**await _json_body(request))
        result = await service.create_call(call_request)
    except PydanticValidationError as e:
        return _error(f"Invalid request: {e.errors()[0]['msg']}")
    except ChatmateError as e:
        logger.error(f"Error creating call: {e.message}")
        return _error(e.message)
    except Exception as e:
        logger.exception("Error creating call")
        return _error(str(e) or "Unknown error")

    return JSONResponse(result.model_dump(), headers=CORS_HEADERS)


@router.post("/text-chat")
async def text_chat(
    request: Request,
    service: IVoiceService = Depends(get_voice_service),
):
    """
    Forward a message to the text agent.

    Body: {"message": str, "conversation_id"?: str}.
    Returns {"response", "conversation_id"}.
    """
    try:
        chat_request = ChatRequest(**await _json_body(request))
        result = await service.send_chat(chat_request)
    except (MissingMessageError, PydanticValidationError):
        return _error("Message is required", status_code=400)
    except ChatmateError as e:
        logger.error(f"Error in text chat: {e.message}")
        return _error(e.message)
    except Exception as e:
        logger.exception("Error in text chat")
        return _error(str(e) or "Unknown error")

    return JSONResponse(result.model_dump(), headers=CORS_HEADERS)
