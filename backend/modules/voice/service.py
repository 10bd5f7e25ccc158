"""
Voice service implementation.

Stateless: conversation continuity for text chat relies entirely on the
provider's conversation_id, which the caller echoes back on each message.
"""

import logging

from shared.config import Settings

from .credentials import CredentialResolver
from .exceptions import CredentialConfigurationError, MissingMessageError
from .interfaces import IVoiceService
from .models import ChatRequest, ChatResponse, CreateCallRequest, CreateCallResponse
from .retell_client import RetellClient

logger = logging.getLogger(__name__)


class VoiceService(IVoiceService):
    """Creates Retell web calls and proxies text chat."""

    def __init__(self, resolver: CredentialResolver, client: RetellClient, settings: Settings):
        self._resolver = resolver
        self._client = client
        self._settings = settings

    async def create_call(self, request: CreateCallRequest) -> CreateCallResponse:
        credentials = self._resolver.resolve(request.api_key, request.is_demo)
        logger.info(f"Creating web call with agent: {credentials.agent_id}")
        access_token = await self._client.create_web_call(credentials.api_key, credentials.agent_id)
        return CreateCallResponse(access_token=access_token)

    async def send_chat(self, request: ChatRequest) -> ChatResponse:
        if not request.message:
            raise MissingMessageError()

        if not self._settings.retell_api_key:
            raise CredentialConfigurationError("RETELL_API_KEY")
        if not self._settings.retell_text_agent_id:
            raise CredentialConfigurationError("RETELL_TEXT_AGENT_ID")

        logger.info(f"Sending text message to agent: {self._settings.retell_text_agent_id}")
        data = await self._client.create_chat_completion(
            self._settings.retell_api_key,
            self._settings.retell_text_agent_id,
            request.message,
            request.conversation_id,
        )
        return ChatResponse(
            response=data.get("agent_message") or data.get("response") or data.get("content"),
            conversation_id=data.get("conversation_id"),
        )
