from .background import Background
from .mood_map_entry import MoodMapEntry
from .mood_reference import MAX_TEMPO, MIN_TEMPO, MoodReference
from .preset import Preset
from .trigger_rule import TriggerRule

__all__ = [
    "MAX_TEMPO",
    "MIN_TEMPO",
    "Background",
    "MoodMapEntry",
    "MoodReference",
    "Preset",
    "TriggerRule",
]
