from .mood_map_repository import MoodMapRepositoryProtocol
from .mood_reference_repository import MoodReferenceRepositoryProtocol
from .preset_repository import PresetRepositoryProtocol
from .trigger_rule_repository import TriggerRuleRepositoryProtocol
from .user_profile_repository import UserProfileRepositoryProtocol

__all__ = [
    "MoodMapRepositoryProtocol",
    "MoodReferenceRepositoryProtocol",
    "PresetRepositoryProtocol",
    "TriggerRuleRepositoryProtocol",
    "UserProfileRepositoryProtocol",
]
