"""Pydantic schemas for inbound websocket payloads."""

from typing import Any

from pydantic import Field

from booksphere.domain.identity.entities.user import (
    MAX_MOOD_SENSITIVITY,
    MAX_MUSIC_VOLUME,
    MIN_MOOD_SENSITIVITY,
    Theme,
)
from booksphere.infrastructure.common.schemas import CamelModel


class InboundPayload(CamelModel):
    """Base for client websocket payloads."""


class ProgressUpdatePayload(InboundPayload):
    book_id: int = Field(..., ge=1)
    preset_id: int | None = Field(None, ge=1, description="Defaults to the preset bound at join")
    chapter: int = Field(..., ge=0)
    page_fraction: float = Field(..., ge=0)
    timestamp: float = Field(..., gt=0, description="Client time in milliseconds")


class RoomJoinPayload(InboundPayload):
    book_id: int = Field(..., ge=1)
    preset_id: int | None = Field(None, ge=1, description="Falls back to the book's default preset")


class RoomLeavePayload(InboundPayload):
    book_id: int = Field(..., ge=1)


class SettingsUpdatePayload(InboundPayload):
    mood_sensitivity: float | None = Field(
        None, ge=MIN_MOOD_SENSITIVITY, le=MAX_MOOD_SENSITIVITY
    )
    music_volume: int | None = Field(None, ge=0, le=MAX_MUSIC_VOLUME)
    dynamic_background: bool | None = None
    theme: Theme | None = None


class SyncEventPayload(InboundPayload):
    """``id`` and ``timestamp`` are generated server-side when omitted."""

    id: str | None = Field(None, min_length=1)
    type: str = Field(..., min_length=1)
    timestamp: float | None = Field(None, gt=0)
    book_id: int | None = Field(None, ge=1)
    preset_id: int | None = Field(None, ge=1)
    data: dict[str, Any] = Field(default_factory=dict)


class SyncRecoverPayload(InboundPayload):
    last_sync_timestamp: float = Field(0, ge=0)
