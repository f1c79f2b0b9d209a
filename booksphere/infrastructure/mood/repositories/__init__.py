from .mood_map_repository import MoodMapRepository
from .mood_reference_repository import MoodReferenceRepository
from .preset_repository import PresetRepository
from .trigger_rule_repository import TriggerRuleRepository

__all__ = [
    "MoodMapRepository",
    "MoodReferenceRepository",
    "PresetRepository",
    "TriggerRuleRepository",
]
