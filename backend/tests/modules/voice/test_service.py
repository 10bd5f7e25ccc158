"""Tests for the voice service."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.voice.service import VoiceService
from modules.voice.models import ChatRequest, CreateCallRequest, CredentialSource, ResolvedCredentials
from modules.voice.exceptions import CredentialConfigurationError, MissingMessageError, VoiceProviderError
from shared.config import Settings


@pytest.fixture
def resolver():
    resolver = MagicMock()
    resolver.resolve.return_value = ResolvedCredentials(
        api_key="key_widget",
        agent_id="agent_widget",
        api_key_source=CredentialSource.WIDGET,
        agent_id_source=CredentialSource.WIDGET,
    )
    return resolver


@pytest.fixture
def client():
    client = AsyncMock()
    client.create_web_call.return_value = "tok_123"
    client.create_chat_completion.return_value = {"agent_message": "Hello!", "conversation_id": "conv_1"}
    return client


@pytest.fixture
def settings():
    return Settings(_env_file=None, retell_api_key="key_default", retell_text_agent_id="agent_text")


@pytest.fixture
def service(resolver, client, settings):
    return VoiceService(resolver, client, settings)


class TestCreateCall:
    @pytest.mark.asyncio
    async def test_creates_call_with_resolved_credentials(self, service, resolver, client):
        response = await service.create_call(CreateCallRequest(api_key="wgt_public"))

        assert response.access_token == "tok_123"
        resolver.resolve.assert_called_once_with("wgt_public", False)
        client.create_web_call.assert_awaited_once_with("key_widget", "agent_widget")

    @pytest.mark.asyncio
    async def test_configuration_error_makes_no_provider_call(self, service, resolver, client):
        resolver.resolve.side_effect = CredentialConfigurationError("RETELL_API_KEY")

        with pytest.raises(CredentialConfigurationError):
            await service.create_call(CreateCallRequest())

        client.create_web_call.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, service, client):
        client.create_web_call.side_effect = VoiceProviderError("Failed to create call: 500 boom", 500, "boom")
        with pytest.raises(VoiceProviderError):
            await service.create_call(CreateCallRequest(is_demo=True))


class TestSendChat:
    @pytest.mark.asyncio
    async def test_forwards_message(self, service, client):
        response = await service.send_chat(ChatRequest(message="Hi", conversation_id="conv_1"))

        assert response.response == "Hello!"
        assert response.conversation_id == "conv_1"
        client.create_chat_completion.assert_awaited_once_with("key_default", "agent_text", "Hi", "conv_1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload,expected", [
        ({"response": "from response"}, "from response"),
        ({"content": "from content"}, "from content"),
        ({}, None),
    ])
    async def test_reply_field_fallbacks(self, service, client, payload, expected):
        client.create_chat_completion.return_value = payload
        response = await service.send_chat(ChatRequest(message="Hi"))
        assert response.response == expected

    @pytest.mark.asyncio
    async def test_missing_message(self, service, client):
        with pytest.raises(MissingMessageError):
            await service.send_chat(ChatRequest(message=""))
        client.create_chat_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_text_agent(self, resolver, client):
        service = VoiceService(resolver, client, Settings(_env_file=None, retell_api_key="k", retell_text_agent_id=""))
        with pytest.raises(CredentialConfigurationError, match="RETELL_TEXT_AGENT_ID"):
            await service.send_chat(ChatRequest(message="Hi"))

    @pytest.mark.asyncio
    async def test_missing_api_key(self, resolver, client):
        service = VoiceService(resolver, client, Settings(_env_file=None, retell_api_key="", retell_text_agent_id="a"))
        with pytest.raises(CredentialConfigurationError, match="RETELL_API_KEY"):
            await service.send_chat(ChatRequest(message="Hi"))
