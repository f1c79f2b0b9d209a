"""Pydantic schemas for the mood catalog API."""

from datetime import datetime
from typing import Any

from pydantic import Field

from booksphere.infrastructure.common.schemas import CamelModel


class PresetResponse(CamelModel):
    id: int
    creator_id: int
    book_id: int
    name: str
    description: str | None = None
    is_default: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TriggerRuleResponse(CamelModel):
    id: int
    preset_id: int
    mood_id: int
    mood_name: str | None = None
    trigger_condition: dict[str, Any] = Field(
        default_factory=dict, description="Stored predicate (page_range, keywords, ...)"
    )
    music_track_id: int | None = None
    background_image_url: str | None = None
    transition_duration: int = Field(..., description="Milliseconds")
    is_active: bool
    priority: int
    created_at: datetime | None = None


class TriggerRuleAtPositionResponse(CamelModel):
    page: int
    rule: TriggerRuleResponse | None = None


class MoodTriggerResponse(CamelModel):
    mood_name: str
    base_tempo: int
    tempo: int
    transition_type: str
    background_image_url: str | None = None


class MoodResolutionResponse(CamelModel):
    preset_id: int
    chapter: int
    page_fraction: float
    genre: str
    sensitivity: float
    trigger: MoodTriggerResponse | None = None
