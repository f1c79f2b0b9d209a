from typing import Protocol

from booksphere.domain.common.value_objects.ids import PresetId
from booksphere.domain.mood.entities.mood_map_entry import MoodMapEntry


class MoodMapRepositoryProtocol(Protocol):
    def find_by_preset(self, preset_id: PresetId) -> list[MoodMapEntry]: ...

