"""SyncEvent: one client- or server-originated change kept for reconciliation."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_objects.ids import BookId, PresetId, UserId


class SyncEventType(StrEnum):
    PROGRESS = "progress"
    MOOD_TRIGGER = "mood_trigger"
    SETTINGS_CHANGE = "settings_change"


@dataclass(frozen=True)
class SyncEvent:
    """
    Reconciliation record.

    ``timestamp`` is client-supplied milliseconds since the epoch. It advances
    per client but carries no global ordering; buffers keep arrival order.
    ``type`` is a plain string so unrecognized types can still be buffered.
    """

    id: str
    type: str
    timestamp: float
    user_id: UserId
    book_id: BookId | None = None
    preset_id: PresetId | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Sync event id is required", field="id")
        if not self.type:
            raise ValidationError("Sync event type is required", field="type")
        if not self.timestamp:
            raise ValidationError("Sync event timestamp is required", field="timestamp")

    @property
    def known_type(self) -> SyncEventType | None:
        try:
            return SyncEventType(self.type)
        except ValueError:
            return None

    def to_json(self) -> dict[str, Any]:
        """Wire representation (camelCase, like every client-facing payload)."""
        return {
            "id": self.id,
            "type": self.type,
            "timestamp": self.timestamp,
            "userId": self.user_id.value,
            "bookId": self.book_id.value if self.book_id else None,
            "presetId": self.preset_id.value if self.preset_id else None,
            "data": self.data,
        }
