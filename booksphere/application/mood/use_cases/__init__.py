from .mood_rule_store_use_case import MoodRuleStoreUseCase
from .reader_preferences_use_case import ReaderPreferencesUseCase
from .resolve_mood_trigger_use_case import ResolveMoodTriggerUseCase

__all__ = [
    "MoodRuleStoreUseCase",
    "ReaderPreferencesUseCase",
    "ResolveMoodTriggerUseCase",
]
