"""
Widgets module data models.

A widget is an embeddable voice/chat surface identified publicly by its
api_key. It may carry its own provider key and agent, which take precedence
over the owner's global key and the environment defaults.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


WIDGET_KEY_PREFIX = "wgt_"


class WidgetPosition(str, Enum):
    """Where the widget launcher sits on the host page."""

    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_LEFT = "bottom-left"


class WidgetConfig(BaseModel):
    """A deployable widget configuration."""

    id: str
    user_id: str
    name: str
    api_key: str
    retell_api_key: Optional[str] = None
    voice_agent_id: Optional[str] = None
    enable_voice: bool = True
    enable_chat: bool = True
    title: Optional[str] = None
    greeting: Optional[str] = None
    primary_color: Optional[str] = None
    # Stored as free text; only updates through the API are restricted to WidgetPosition
    position: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WidgetResponse(BaseModel):
    """
    Widget as returned to its owner.

    Provider overrides are reported as set/unset; the secret itself is
    never echoed back.
    """

    id: str
    name: str
    api_key: str
    has_provider_key: bool
    voice_agent_id: Optional[str] = None
    enable_voice: bool
    enable_chat: bool
    title: Optional[str] = None
    greeting: Optional[str] = None
    primary_color: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_config(cls, widget: WidgetConfig) -> "WidgetResponse":
        return cls(
            id=widget.id,
            name=widget.name,
            api_key=widget.api_key,
            has_provider_key=bool(widget.retell_api_key),
            voice_agent_id=widget.voice_agent_id,
            enable_voice=widget.enable_voice,
            enable_chat=widget.enable_chat,
            title=widget.title,
            greeting=widget.greeting,
            primary_color=widget.primary_color,
            position=widget.position,
            created_at=widget.created_at,
        )


class CreateWidgetRequest(BaseModel):
    """Request to create a new widget."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name of the widget")


# Columns that may be updated but never cleared
NON_NULLABLE_FIELDS = ("name", "enable_voice", "enable_chat")


class UpdateWidgetRequest(BaseModel):
    """
    Partial update of a widget.

    Only fields present in the request body are written. Sending an empty
    string for retell_api_key or voice_agent_id clears the override.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    retell_api_key: Optional[str] = None
    voice_agent_id: Optional[str] = None
    enable_voice: Optional[bool] = None
    enable_chat: Optional[bool] = None
    title: Optional[str] = Field(None, max_length=200)
    greeting: Optional[str] = Field(None, max_length=1000)
    primary_color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    position: Optional[WidgetPosition] = None

    def to_update(self) -> dict:
        """
        Fields explicitly set by the caller, with cleared overrides as None.

        An explicit null for a non-nullable column is dropped rather than written.
        """
        data = self.model_dump(exclude_unset=True, mode="json")
        for field in NON_NULLABLE_FIELDS:
            if field in data and data[field] is None:
                del data[field]
        for field in ("retell_api_key", "voice_agent_id"):
            if field in data and data[field] == "":
                data[field] = None
        return data


class WidgetListResponse(BaseModel):
    """An account's widgets with its current quota."""

    widgets: list[WidgetResponse]
    total: int
    widget_limit: Optional[int] = Field(None, description="Widget quota; null means unlimited")
