from typing import Protocol

from booksphere.domain.common.value_objects.ids import BookId
from booksphere.domain.mood.entities.preset import Preset


class PresetRepositoryProtocol(Protocol):
    def find_default_for_book(self, book_id: BookId) -> Preset | None: ...
