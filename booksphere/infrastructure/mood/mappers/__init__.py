from .mood_map_entry_mapper import MoodMapEntryMapper
from .mood_reference_mapper import MoodReferenceMapper
from .preset_mapper import PresetMapper
from .trigger_rule_mapper import TriggerRuleMapper

__all__ = [
    "MoodMapEntryMapper",
    "MoodReferenceMapper",
    "PresetMapper",
    "TriggerRuleMapper",
]
