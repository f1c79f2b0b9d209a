from typing import Protocol

from booksphere.domain.common.value_objects.ids import BackgroundId, MoodId
from booksphere.domain.mood.entities.background import Background
from booksphere.domain.mood.entities.mood_reference import MoodReference


class MoodReferenceRepositoryProtocol(Protocol):
    def find_by_id(self, mood_id: MoodId) -> MoodReference | None: ...

    def find_all(self) -> list[MoodReference]: ...

    def find_background(self, background_id: BackgroundId) -> Background | None: ...
