"""
Retell API client.

Two endpoints are used: web-call creation for voice widgets and chat
completion for text chat. Every call is a single attempt; a non-2xx
response becomes VoiceProviderError carrying status and body.
"""

import logging
from typing import Any, Optional

import httpx

from .exceptions import VoiceProviderError

logger = logging.getLogger(__name__)


class RetellClient:
    """Async HTTP client for the Retell API."""

    def __init__(self, base_url: str = "https://api.retellai.com", timeout: float = 30.0):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def create_web_call(self, api_key: str, agent_id: str) -> str:
        """
        Create a web call and return its access token.

        Raises:
            VoiceProviderError: On a non-success response or transport failure
        """
        data = await self._post(
            "/v2/create-web-call",
            api_key,
            {"agent_id": agent_id},
            "Failed to create call",
        )
        access_token = data.get("access_token")
        if not access_token:
            raise VoiceProviderError("Failed to create call: no access token in response")
        logger.info("Web call created successfully")
        return access_token

    async def create_chat_completion(
        self,
        api_key: str,
        agent_id: str,
        message: str,
        conversation_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Send a user message to a chat agent and return the raw response.

        conversation_id is omitted from the request when not given, letting
        the provider start a new conversation.
        """
        payload: dict[str, Any] = {"agent_id": agent_id, "user_message": message}
        if conversation_id:
            payload["conversation_id"] = conversation_id

        return await self._post(
            "/v2/create-chat-completion",
            api_key,
            payload,
            "Failed to send message",
        )

    async def _post(
        self,
        path: str,
        api_key: str,
        payload: dict[str, Any],
        failure: str,
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    f"{self._base_url}{path}",
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            logger.error(f"Retell request to {path} failed: {e}")
            raise VoiceProviderError(f"{failure}: {e}")

        if not response.is_success:
            logger.error(f"Retell API error: {response.status_code} {response.text}")
            raise VoiceProviderError(
                f"{failure}: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError:
            raise VoiceProviderError(f"{failure}: invalid JSON response", status_code=response.status_code)
