from enum import StrEnum
from typing import Any, Protocol

from booksphere.domain.common.value_objects.ids import UserId


class AuditAction(StrEnum):
    CONNECTION_OPENED = "WEBSOCKET_CONNECT"
    CONNECTION_CLOSED = "WEBSOCKET_DISCONNECT"
    MOOD_TRIGGER = "MOOD_TRIGGER"
    READING_PROGRESS = "READING_PROGRESS"
    SETTINGS_CHANGE = "SETTINGS_CHANGE"
    MOOD_TRIGGER_SYNC = "MOOD_TRIGGER_SYNC"
    SETTINGS_CHANGE_SYNC = "SETTINGS_CHANGE_SYNC"
    SYNC_BATCH = "SYNC_BATCH"
    SYNC_CLEARED = "SYNC_CLEARED"


class AuditTrailProtocol(Protocol):
    async def record(
        self,
        user_id: UserId,
        action: AuditAction,
        entity_type: str,
        entity_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None: ...
