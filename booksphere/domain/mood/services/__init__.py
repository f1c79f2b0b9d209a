from .mood_resolver import MoodResolver, MoodTriggerOutcome, clamp_sensitivity
from .trigger_rule_selector import TriggerRuleSelector

__all__ = [
    "MoodResolver",
    "MoodTriggerOutcome",
    "TriggerRuleSelector",
    "clamp_sensitivity",
]
