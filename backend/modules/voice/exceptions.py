"""
Voice module exceptions.
"""

from typing import Optional

from shared.exceptions import ChatmateError, ConfigurationError, ExternalServiceError, ValidationError


class VoiceError(ChatmateError):
    """Base exception for voice and chat errors."""

    pass


class CredentialConfigurationError(ConfigurationError):
    """Raised when no provider API key or agent ID could be resolved."""

    def __init__(self, setting: str):
        super().__init__(
            setting,
            f"{setting} is not configured",
            code="CREDENTIAL_NOT_CONFIGURED",
        )


class VoiceProviderError(ExternalServiceError):
    """Raised when the voice provider returns a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(
            message,
            service="retell",
            code="VOICE_PROVIDER_ERROR",
            details={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class MissingMessageError(ValidationError):
    """Raised when a text-chat request has no message."""

    def __init__(self):
        super().__init__("Message is required", code="MISSING_MESSAGE")
