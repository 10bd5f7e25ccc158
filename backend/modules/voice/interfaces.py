"""
Voice module interface.
"""

from typing import Protocol, runtime_checkable

from .models import ChatRequest, ChatResponse, CreateCallRequest, CreateCallResponse


@runtime_checkable
class IVoiceService(Protocol):
    """
    Interface for voice call creation and the text-chat proxy.
    """

    async def create_call(self, request: CreateCallRequest) -> CreateCallResponse:
        """
        Resolve credentials and create a web call.

        Raises:
            CredentialConfigurationError: If no key or agent could be resolved
            VoiceProviderError: If the provider rejects the call
        """
        ...

    async def send_chat(self, request: ChatRequest) -> ChatResponse:
        """
        Forward a chat message to the text agent.

        Raises:
            MissingMessageError: If the request has no message
            CredentialConfigurationError: If the key or text agent is unset
            VoiceProviderError: If the provider rejects the message
        """
        ...
