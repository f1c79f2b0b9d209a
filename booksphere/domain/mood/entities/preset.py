"""Preset aggregate root."""

from dataclasses import dataclass
from datetime import datetime

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_objects.ids import BookId, PresetId, UserId

MAX_PRESET_NAME_LENGTH = 200


@dataclass(eq=False)
class Preset(Entity[PresetId]):
    """
    Named configuration of mood transitions for exactly one book.

    Business Rules:
    - At most one default preset per book (enforced by the store)
    - Deleting it deletes its trigger rules and map entries
    """

    id: PresetId
    creator_id: UserId
    book_id: BookId
    name: str
    description: str | None = None
    is_default: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("Preset name cannot be empty", field="name")
        if len(self.name) > MAX_PRESET_NAME_LENGTH:
            raise ValidationError(
                f"Preset name cannot exceed {MAX_PRESET_NAME_LENGTH} characters", field="name"
            )
