"""
Voice module data models.

Request and response shapes of the call-creation and text-chat endpoints,
and the credential pair the resolver produces.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CredentialSource(str, Enum):
    """Precedence level that supplied a credential."""

    WIDGET = "widget"
    PROFILE = "profile"
    DEMO = "demo"
    DEFAULT = "default"


class ResolvedCredentials(BaseModel):
    """Provider API key and agent ID to use for one call."""

    api_key: str = Field(..., min_length=1)
    agent_id: str = Field(..., min_length=1)
    api_key_source: CredentialSource
    agent_id_source: CredentialSource

    model_config = {"frozen": True}


class DemoSettings(BaseModel):
    """Singleton override used by the public demo widget."""

    retell_api_key: Optional[str] = None
    voice_agent_id: Optional[str] = None


class CreateCallRequest(BaseModel):
    """Body of a call-creation request. Both fields are optional."""

    api_key: Optional[str] = Field(None, description="Public widget key")
    is_demo: bool = Field(False, description="Use the demo widget settings")

    model_config = {"extra": "ignore"}


class CreateCallResponse(BaseModel):
    """Provider session token for the browser's web call."""

    access_token: str


class ChatRequest(BaseModel):
    """Body of a text-chat request."""

    message: Optional[str] = None
    conversation_id: Optional[str] = None

    model_config = {"extra": "ignore"}


class ChatResponse(BaseModel):
    """Agent reply and the provider's conversation ID, if it returned one."""

    response: Optional[str] = None
    conversation_id: Optional[str] = None
