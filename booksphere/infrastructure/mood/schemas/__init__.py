"""Mood infrastructure schemas."""

from booksphere.infrastructure.mood.schemas.mood_schemas import (
    MoodResolutionResponse,
    MoodTriggerResponse,
    PresetResponse,
    TriggerRuleAtPositionResponse,
    TriggerRuleResponse,
)

__all__ = [
    "MoodResolutionResponse",
    "MoodTriggerResponse",
    "PresetResponse",
    "TriggerRuleAtPositionResponse",
    "TriggerRuleResponse",
]
