"""Common value objects shared across all domain modules."""

from .ids import (
    BackgroundId,
    BookId,
    MoodId,
    MoodMapEntryId,
    PresetId,
    TriggerRuleId,
    UserId,
)

__all__ = [
    "BackgroundId",
    "BookId",
    "MoodId",
    "MoodMapEntryId",
    "PresetId",
    "TriggerRuleId",
    "UserId",
]
