from typing import Protocol

from booksphere.domain.common.value_objects.ids import PresetId
from booksphere.domain.mood.entities.trigger_rule import TriggerRule


class TriggerRuleRepositoryProtocol(Protocol):
    def find_by_preset(self, preset_id: PresetId) -> list[TriggerRule]: ...
