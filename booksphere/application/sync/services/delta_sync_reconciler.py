"""
Delta sync reconciliation.

Buffers recent client-originated events per user and answers "what happened
since timestamp T" so that reconnecting clients can catch up. The buffer is a
best-effort reconciliation aid: it lives behind ``SyncEventStoreProtocol`` and
is lost on restart. Clients tolerate gaps using the server timestamp watermark.
"""

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from booksphere.application.sync.protocols.audit_trail import AuditAction, AuditTrailProtocol
from booksphere.application.sync.protocols.sync_event_store import SyncEventStoreProtocol
from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_objects.ids import BookId, PresetId, UserId
from booksphere.domain.sync.entities.sync_event import SyncEvent, SyncEventType

logger = structlog.get_logger(__name__)

REQUIRED_EVENT_FIELDS = ("id", "type", "timestamp")

_AUDIT_ACTIONS = {
    SyncEventType.PROGRESS: AuditAction.READING_PROGRESS,
    SyncEventType.MOOD_TRIGGER: AuditAction.MOOD_TRIGGER_SYNC,
    SyncEventType.SETTINGS_CHANGE: AuditAction.SETTINGS_CHANGE_SYNC,
}


def current_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SyncDelta:
    events: list[SyncEvent]
    server_timestamp: int


@dataclass(frozen=True)
class SyncStats:
    count: int
    oldest: float | None = None
    newest: float | None = None


@dataclass(frozen=True)
class ProcessDeltaResult:
    processed: int
    skipped: int
    errors: list[str] = field(default_factory=list)


class DeltaSyncReconciler:
    """
    Owner of the per-user sync buffers.

    Dispatch code and REST handlers go through this class only; nothing else
    touches the store. ``clock`` returns milliseconds since the epoch.
    """

    def __init__(
        self,
        store: SyncEventStoreProtocol,
        audit_trail: AuditTrailProtocol,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self.store = store
        self.audit_trail = audit_trail
        self.clock = clock

    def now(self) -> int:
        return self.clock()

    async def record(self, user_id: int, event: SyncEvent) -> None:
        """Append ``event`` to the user's buffer, evicting the oldest on overflow."""
        await self.store.append(UserId(user_id), event)
        logger.debug(
            "sync_event_recorded",
            user_id=user_id,
            event_id=event.id,
            event_type=event.type,
        )

    async def delta(self, user_id: int, since: float) -> SyncDelta:
        """
        Events strictly newer than ``since``, in buffer order.

        Args:
            user_id: Owner of the buffer
            since: Client watermark in milliseconds; 0 returns everything

        Returns:
            SyncDelta with the events and the server time the client should
            persist as its next watermark
        """
        events = await self.store.list_events(UserId(user_id))
        newer = [event for event in events if event.timestamp > since]
        server_timestamp = self.now()

        logger.debug(
            "sync_delta_computed",
            user_id=user_id,
            since=since,
            buffered=len(events),
            returned=len(newer),
        )
        return SyncDelta(events=newer, server_timestamp=server_timestamp)

    async def stats(self, user_id: int) -> SyncStats:
        events = await self.store.list_events(UserId(user_id))
        if not events:
            return SyncStats(count=0)
        timestamps = [event.timestamp for event in events]
        return SyncStats(count=len(events), oldest=min(timestamps), newest=max(timestamps))

    async def clear(self, user_id: int) -> None:
        await self.store.clear(UserId(user_id))
        logger.info("sync_buffer_cleared", user_id=user_id)
        await self._audit(user_id, AuditAction.SYNC_CLEARED, "sync_event")

    async def ingest(self, user_id: int, event: SyncEvent) -> None:
        """Buffer ``event`` and apply the side effect of its type, if any."""
        await self.record(user_id, event)

        event_type = event.known_type
        if event_type is None:
            logger.warning(
                "sync_event_type_unknown",
                user_id=user_id,
                event_id=event.id,
                event_type=event.type,
            )
            return

        details = {"eventId": event.id, "timestamp": event.timestamp, **event.data}
        if event.preset_id is not None:
            details["presetId"] = event.preset_id.value
        await self._audit(
            user_id,
            _AUDIT_ACTIONS[event_type],
            "book" if event.book_id is not None else "sync_event",
            event.book_id.value if event.book_id is not None else None,
            details,
        )

    async def process_delta(
        self, user_id: int, raw_events: Iterable[Mapping[str, Any]]
    ) -> ProcessDeltaResult:
        """
        Ingest a batch of client events.

        Entries missing ``id``, ``type`` or ``timestamp`` (or carrying
        malformed references) are skipped with a warning; the rest of the
        batch still goes through.

        Returns:
            Counts of processed and skipped events plus a reason per skip
        """
        processed = 0
        errors: list[str] = []

        for index, raw in enumerate(raw_events):
            try:
                event = self.parse_event(user_id, raw)
            except ValidationError as e:
                logger.warning(
                    "sync_event_skipped",
                    user_id=user_id,
                    index=index,
                    reason=e.message,
                )
                errors.append(f"event[{index}]: {e.message}")
                continue

            await self.ingest(user_id, event)
            processed += 1

        logger.info(
            "sync_delta_processed",
            user_id=user_id,
            processed=processed,
            skipped=len(errors),
        )
        if processed:
            await self._audit(
                user_id,
                AuditAction.SYNC_BATCH,
                "sync_event",
                details={"processed": processed, "skipped": len(errors)},
            )
        return ProcessDeltaResult(processed=processed, skipped=len(errors), errors=errors)

    @staticmethod
    def parse_event(user_id: int, raw: Mapping[str, Any]) -> SyncEvent:
        """
        Build a SyncEvent from a camelCase client payload.

        Raises:
            ValidationError: If a mandatory field is missing or a field is malformed
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("Sync event must be an object")

        missing = [name for name in REQUIRED_EVENT_FIELDS if not raw.get(name)]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", field=missing[0]
            )

        timestamp = raw["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, int | float):
            raise ValidationError("timestamp must be a number", field="timestamp", value=timestamp)

        data = raw.get("data") or {}
        if not isinstance(data, Mapping):
            raise ValidationError("data must be an object", field="data")

        try:
            book_id = BookId(int(raw["bookId"])) if raw.get("bookId") is not None else None
            preset_id = PresetId(int(raw["presetId"])) if raw.get("presetId") is not None else None
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid reference: {e}") from e

        return SyncEvent(
            id=str(raw["id"]),
            type=str(raw["type"]),
            timestamp=timestamp,
            user_id=UserId(user_id),
            book_id=book_id,
            preset_id=preset_id,
            data=dict(data),
        )

    async def _audit(
        self,
        user_id: int,
        action: AuditAction,
        entity_type: str,
        entity_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        try:
            await self.audit_trail.record(UserId(user_id), action, entity_type, entity_id, details)
        except Exception:
            logger.warning(
                "audit_write_failed", user_id=user_id, action=str(action), exc_info=True
            )
