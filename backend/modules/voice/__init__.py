"""
Voice module.

Resolves provider credentials for embedded widgets, creates Retell web
calls and proxies text chat.

Public API:
- IVoiceService: Interface for call creation and text chat
- CredentialResolver: Widget -> profile -> default override resolution
- RetellClient: HTTP client for the Retell API
- Voice exceptions: CredentialConfigurationError, VoiceProviderError, etc.
"""

from .interfaces import IVoiceService
from .credentials import CredentialResolver
from .retell_client import RetellClient
from .models import (
    ChatRequest,
    ChatResponse,
    CreateCallRequest,
    CreateCallResponse,
    CredentialSource,
    DemoSettings,
    ResolvedCredentials,
)
from .exceptions import (
    VoiceError,
    CredentialConfigurationError,
    VoiceProviderError,
    MissingMessageError,
)

__all__ = [
    # Interface
    "IVoiceService",
    # Implementations
    "CredentialResolver",
    "RetellClient",
    # Models
    "ChatRequest",
    "ChatResponse",
    "CreateCallRequest",
    "CreateCallResponse",
    "CredentialSource",
    "DemoSettings",
    "ResolvedCredentials",
    # Exceptions
    "VoiceError",
    "CredentialConfigurationError",
    "VoiceProviderError",
    "MissingMessageError",
]
