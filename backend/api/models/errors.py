"""
Error body for domain errors that reach the application boundary.

`error` carries the human-readable message, the same key the public widget
endpoints use, so a client can read `error` from any failure.
"""

from typing import Any

from pydantic import BaseModel, Field

from shared.exceptions import ChatmateError


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: ChatmateError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code, details=exc.details)
