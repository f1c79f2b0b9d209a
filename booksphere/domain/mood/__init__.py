"""Mood module domain layer."""

from .entities import Background, MoodMapEntry, MoodReference, Preset, TriggerRule
from .services import MoodResolver, MoodTriggerOutcome, TriggerRuleSelector

__all__ = [
    "Background",
    "MoodMapEntry",
    "MoodReference",
    "MoodResolver",
    "MoodTriggerOutcome",
    "Preset",
    "TriggerRule",
    "TriggerRuleSelector",
]
