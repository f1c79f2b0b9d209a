"""
Trigger dispatch pipeline.

One ``MessageDispatcher`` serves every connection. Each connection feeds it
inbound frames one at a time, in arrival order. Handlers never raise: any
failure becomes an ``error`` message for the calling session only, and the
connection stays open.
"""

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from booksphere.application.realtime.connection_state import ConnectionState
from booksphere.application.realtime.events import (
    ErrorCode,
    InboundEvent,
    OutboundMessage,
    SyncStatus,
    error_message,
    mood_trigger_message,
    pong_message,
    sync_recovery_message,
    sync_status_message,
)
from booksphere.application.realtime.protocols import (
    BackgroundUrlSignerProtocol,
    MoodGatewayProtocol,
    ReaderProfileGatewayProtocol,
)
from booksphere.application.realtime.session import NotInRoomError, Session
from booksphere.application.realtime.session_registry import SessionRegistry, room_name
from booksphere.application.sync.protocols.audit_trail import AuditAction, AuditTrailProtocol
from booksphere.application.sync.services.delta_sync_reconciler import DeltaSyncReconciler
from booksphere.domain.common.exceptions import ValidationError as DomainValidationError
from booksphere.domain.common.value_objects.ids import BookId, PresetId, UserId
from booksphere.domain.mood.services.mood_resolver import MoodTriggerOutcome
from booksphere.domain.sync.entities.sync_event import SyncEvent, SyncEventType
from booksphere.exceptions import UserNotFoundError
from booksphere.infrastructure.realtime.schemas import (
    ProgressUpdatePayload,
    RoomJoinPayload,
    RoomLeavePayload,
    SettingsUpdatePayload,
    SyncEventPayload,
    SyncRecoverPayload,
)

logger = structlog.get_logger(__name__)

Handler = Callable[[Session, dict[str, Any]], Awaitable[None]]

_FAILURE_MESSAGES = {
    ErrorCode.PROGRESS_UPDATE_ERROR: "Failed to process progress update",
    ErrorCode.ROOM_JOIN_ERROR: "Failed to join room",
    ErrorCode.ROOM_LEAVE_ERROR: "Failed to leave room",
    ErrorCode.SETTINGS_UPDATE_ERROR: "Failed to update settings",
    ErrorCode.SYNC_EVENT_ERROR: "Failed to process sync event",
    ErrorCode.SYNC_STATUS_ERROR: "Failed to get sync status",
    ErrorCode.SYNC_RECOVERY_ERROR: "Failed to recover sync data",
}

# Wire names for settings_change events
_SETTING_NAMES = {
    "mood_sensitivity": "moodSensitivity",
    "music_volume": "musicVolume",
    "dynamic_background": "dynamicBackground",
    "theme": "theme",
}


def _book_id_of(room: str) -> int:
    return int(room.removeprefix("book:"))


def _validation_summary(error: PydanticValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "data"
        parts.append(f"{location}: {detail['msg']}")
    return "Invalid payload - " + "; ".join(parts)


class MessageDispatcher:
    """Routes inbound websocket events to their handlers."""

    def __init__(
        self,
        registry: SessionRegistry,
        reconciler: DeltaSyncReconciler,
        profiles: ReaderProfileGatewayProtocol,
        moods: MoodGatewayProtocol,
        url_signer: BackgroundUrlSignerProtocol,
        audit_trail: AuditTrailProtocol,
        default_genre: str = "electronic",
        default_sensitivity: float = 1.0,
        auto_leave_previous_room: bool = True,
    ) -> None:
        self.registry = registry
        self.reconciler = reconciler
        self.profiles = profiles
        self.moods = moods
        self.url_signer = url_signer
        self.audit_trail = audit_trail
        self.default_genre = default_genre
        self.default_sensitivity = default_sensitivity
        self.auto_leave_previous_room = auto_leave_previous_room

        self._handlers: dict[InboundEvent, tuple[Handler, ErrorCode]] = {
            InboundEvent.PROGRESS_UPDATE: (
                self.handle_progress_update,
                ErrorCode.PROGRESS_UPDATE_ERROR,
            ),
            InboundEvent.ROOM_JOIN: (self.handle_room_join, ErrorCode.ROOM_JOIN_ERROR),
            InboundEvent.ROOM_LEAVE: (self.handle_room_leave, ErrorCode.ROOM_LEAVE_ERROR),
            InboundEvent.SETTINGS_UPDATE: (
                self.handle_settings_update,
                ErrorCode.SETTINGS_UPDATE_ERROR,
            ),
            InboundEvent.SYNC_EVENT: (self.handle_sync_event, ErrorCode.SYNC_EVENT_ERROR),
            InboundEvent.SYNC_STATUS_REQUEST: (
                self.handle_sync_status_request,
                ErrorCode.SYNC_STATUS_ERROR,
            ),
            InboundEvent.SYNC_RECOVER: (self.handle_sync_recover, ErrorCode.SYNC_RECOVERY_ERROR),
            InboundEvent.MOOD_MANUAL_TRIGGER: (
                self.handle_manual_trigger,
                ErrorCode.SYNC_STATUS_ERROR,
            ),
            InboundEvent.MOOD_PREFERENCES_UPDATE: (
                self.handle_mood_preferences_update,
                ErrorCode.SYNC_STATUS_ERROR,
            ),
            InboundEvent.PING: (self.handle_ping, ErrorCode.SYNC_STATUS_ERROR),
        }

    # Connection lifecycle

    async def on_connect(self, session: Session) -> None:
        """Register an authenticated session and greet it."""
        self.registry.register(session)
        session.state.transition(ConnectionState.IDLE)
        self._send(
            session,
            sync_status_message(SyncStatus.CONNECTED, "Connected", self.reconciler.now()),
        )
        logger.info("websocket_connected", user_id=session.user_id, session_id=session.id)
        await self._audit(
            session,
            AuditAction.CONNECTION_OPENED,
            "websocket",
            details={"sessionId": session.id},
        )

    async def on_disconnect(self, session: Session) -> None:
        """Leave every room (notifying members) and release the session."""
        if session.state.is_closed:
            return
        session.state.transition(ConnectionState.DISCONNECTED)
        await self.registry.disconnect(session)
        logger.info("websocket_disconnected", user_id=session.user_id, session_id=session.id)
        await self._audit(
            session,
            AuditAction.CONNECTION_CLOSED,
            "websocket",
            details={"sessionId": session.id},
        )

    # Routing

    async def dispatch(self, session: Session, frame: Any) -> None:  # noqa: ANN401
        """Handle one inbound frame ``{"event": name, "data": {...}}``."""
        if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
            self._send(session, error_message("Malformed message", ErrorCode.VALIDATION_ERROR))
            return

        name = frame["event"]
        try:
            event = InboundEvent(name)
        except ValueError:
            logger.warning("websocket_unknown_event", user_id=session.user_id, message_event=name)
            self._send(session, error_message(f"Unknown event: {name}", ErrorCode.UNKNOWN_EVENT))
            return

        data = frame.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            self._send(session, error_message("data must be an object", ErrorCode.VALIDATION_ERROR))
            return

        handler, failure_code = self._handlers[event]
        try:
            await handler(session, data)
        except PydanticValidationError as e:
            logger.warning(
                "websocket_payload_invalid",
                user_id=session.user_id,
                message_event=name,
                errors=e.errors(),
            )
            self._send(session, error_message(_validation_summary(e), ErrorCode.VALIDATION_ERROR))
        except DomainValidationError as e:
            self._send(session, error_message(e.message, ErrorCode.VALIDATION_ERROR))
        except NotInRoomError as e:
            self._send(session, error_message(e.message, ErrorCode.NOT_IN_ROOM))
        except UserNotFoundError as e:
            self._send(session, error_message(e.message, ErrorCode.USER_NOT_FOUND))
        except Exception:
            logger.error(
                "websocket_handler_failed",
                user_id=session.user_id,
                message_event=name,
                exc_info=True,
            )
            self._send(
                session,
                error_message(_FAILURE_MESSAGES.get(failure_code, "Request failed"), failure_code),
            )

    # Handlers

    async def handle_progress_update(self, session: Session, data: dict[str, Any]) -> None:
        """
        Resolve the mood for a position and fan it out to the room.

        The sender gets the trigger directly; other members of ``book:<bookId>``
        get it through the room broadcast. The update itself, and the derived
        trigger when there is one, go into the sender's sync buffer.
        Without a presetId the preset bound at room join is used; with neither
        there is no mood to resolve and only the progress is recorded.
        """
        payload = ProgressUpdatePayload.model_validate(data)
        room = room_name(payload.book_id)
        if not session.state.is_in_room or room not in session.rooms:
            raise NotInRoomError(payload.book_id)
        preset_id = payload.preset_id or session.preset_for_room(room)

        user = await self.profiles.get_user(session.user_id)
        sensitivity = user.preferences.mood_sensitivity
        if sensitivity is None:
            sensitivity = self.default_sensitivity

        outcome = None
        if preset_id is not None:
            outcome = await self.moods.resolve(
                preset_id,
                payload.chapter,
                payload.page_fraction,
                self.default_genre,
                sensitivity,
            )

        trigger = None
        if outcome is not None:
            trigger = self._trigger_message(session, outcome)
            self._send(session, trigger)
            await self.registry.broadcast(room, trigger, exclude=session)
            logger.debug(
                "mood_trigger_dispatched",
                user_id=session.user_id,
                book_id=payload.book_id,
                preset_id=preset_id,
                chapter=payload.chapter,
                page_fraction=payload.page_fraction,
                mood_name=outcome.mood_name,
                tempo=outcome.tempo,
            )

        progress = {"chapter": payload.chapter, "pageFraction": payload.page_fraction}
        await self.reconciler.record(
            session.user_id,
            self._sync_event(
                session,
                SyncEventType.PROGRESS,
                payload.timestamp,
                payload.book_id,
                preset_id,
                progress,
            ),
        )
        if trigger is not None and outcome is not None:
            await self.reconciler.record(
                session.user_id,
                self._sync_event(
                    session,
                    SyncEventType.MOOD_TRIGGER,
                    trigger.data["timestamp"],
                    payload.book_id,
                    preset_id,
                    {key: value for key, value in trigger.data.items() if key != "timestamp"},
                ),
            )
            await self._audit(
                session,
                AuditAction.MOOD_TRIGGER,
                "preset",
                preset_id,
                {
                    **progress,
                    "moodName": outcome.mood_name,
                    "baseTempo": outcome.base_tempo,
                    "tempo": outcome.tempo,
                    "sensitivity": sensitivity,
                },
            )

        await self._audit(
            session,
            AuditAction.READING_PROGRESS,
            "book",
            payload.book_id,
            {**progress, "presetId": preset_id, "timestamp": payload.timestamp},
        )

    async def handle_room_join(self, session: Session, data: dict[str, Any]) -> None:
        payload = RoomJoinPayload.model_validate(data)
        room = room_name(payload.book_id)

        # Lookups happen before any membership change so a failure leaves rooms intact
        preset_id = payload.preset_id
        if preset_id is None:
            preset_id = await self.moods.default_preset_id(payload.book_id)

        if self.auto_leave_previous_room:
            for previous in sorted(session.rooms - {room}):
                await self.registry.leave(session, _book_id_of(previous))

        await self.registry.join(session, payload.book_id)
        session.presets[room] = preset_id
        session.state.transition(ConnectionState.IN_ROOM)
        logger.info(
            "websocket_room_joined",
            user_id=session.user_id,
            book_id=payload.book_id,
            preset_id=preset_id,
        )

    async def handle_room_leave(self, session: Session, data: dict[str, Any]) -> None:
        payload = RoomLeavePayload.model_validate(data)
        left = await self.registry.leave(session, payload.book_id)
        if not session.rooms and session.state.is_in_room:
            session.state.transition(ConnectionState.IDLE)
        if left:
            logger.info("websocket_room_left", user_id=session.user_id, book_id=payload.book_id)

    async def handle_settings_update(self, session: Session, data: dict[str, Any]) -> None:
        """Persist changed preferences and record one settings_change event per field."""
        payload = SettingsUpdatePayload.model_validate(data)
        changes = payload.model_dump(exclude_none=True)
        changed = await self.profiles.update_preferences(session.user_id, **changes)

        now = self.reconciler.now()
        for name, (old_value, new_value) in changed.items():
            setting_name = _SETTING_NAMES.get(name, name)
            await self.reconciler.record(
                session.user_id,
                self._sync_event(
                    session,
                    SyncEventType.SETTINGS_CHANGE,
                    now,
                    data={
                        "settingName": setting_name,
                        "oldValue": old_value,
                        "newValue": new_value,
                    },
                ),
            )

        if changed:
            await self._audit(
                session,
                AuditAction.SETTINGS_CHANGE,
                "user",
                session.user_id,
                {_SETTING_NAMES.get(name, name): new for name, (_, new) in changed.items()},
            )

        self._send(
            session,
            sync_status_message(
                SyncStatus.SYNCING,
                "Settings updated",
                now,
                changed=[_SETTING_NAMES.get(name, name) for name in changed],
            ),
        )

    async def handle_sync_event(self, session: Session, data: dict[str, Any]) -> None:
        payload = SyncEventPayload.model_validate(data)
        now = self.reconciler.now()
        event = SyncEvent(
            id=payload.id or f"{session.user_id}-{now}-{uuid.uuid4().hex[:8]}",
            type=payload.type,
            timestamp=payload.timestamp or now,
            user_id=UserId(session.user_id),
            book_id=BookId(payload.book_id) if payload.book_id is not None else None,
            preset_id=PresetId(payload.preset_id) if payload.preset_id is not None else None,
            data=payload.data,
        )
        await self.reconciler.ingest(session.user_id, event)
        self._send(
            session, sync_status_message(SyncStatus.SYNCING, "Event synchronized", now)
        )

    async def handle_sync_status_request(self, session: Session, data: dict[str, Any]) -> None:
        stats = await self.reconciler.stats(session.user_id)
        self._send(
            session,
            sync_status_message(
                SyncStatus.CONNECTED,
                f"{stats.count} events pending",
                self.reconciler.now(),
                pendingEvents=stats.count,
            ),
        )

    async def handle_sync_recover(self, session: Session, data: dict[str, Any]) -> None:
        payload = SyncRecoverPayload.model_validate(data)
        delta = await self.reconciler.delta(session.user_id, payload.last_sync_timestamp)
        self._send(
            session,
            sync_recovery_message(
                [event.to_json() for event in delta.events], delta.server_timestamp
            ),
        )
        logger.debug(
            "sync_recovery_sent",
            user_id=session.user_id,
            last_sync_timestamp=payload.last_sync_timestamp,
            recovered_events=len(delta.events),
        )

    async def handle_manual_trigger(self, session: Session, data: dict[str, Any]) -> None:
        logger.debug("manual_mood_trigger_requested", user_id=session.user_id, data=data)
        self._send(
            session,
            sync_status_message(
                SyncStatus.CONNECTED, "Manual mood trigger received", self.reconciler.now()
            ),
        )

    async def handle_mood_preferences_update(
        self, session: Session, data: dict[str, Any]
    ) -> None:
        logger.debug("mood_preferences_update_requested", user_id=session.user_id, data=data)
        self._send(
            session,
            sync_status_message(
                SyncStatus.CONNECTED, "Mood preferences received", self.reconciler.now()
            ),
        )

    async def handle_ping(self, session: Session, data: dict[str, Any]) -> None:
        self._send(session, pong_message(self.reconciler.now()))

    # Helpers

    def _send(self, session: Session, message: OutboundMessage) -> None:
        self.registry.send(session, message)

    def _trigger_message(self, session: Session, outcome: MoodTriggerOutcome) -> OutboundMessage:
        background_url = None
        if outcome.background_path:
            background_url = self.url_signer.generate(outcome.background_path, session.user_id)
        return mood_trigger_message(
            mood_name=outcome.mood_name,
            tempo=outcome.tempo,
            transition_type=outcome.transition_type.value,
            background_image_url=background_url,
            timestamp=self.reconciler.now(),
        )

    def _sync_event(
        self,
        session: Session,
        event_type: SyncEventType,
        timestamp: float,
        book_id: int | None = None,
        preset_id: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> SyncEvent:
        now = self.reconciler.now()
        return SyncEvent(
            id=f"{session.user_id}-{now}-{uuid.uuid4().hex[:8]}",
            type=event_type.value,
            timestamp=timestamp,
            user_id=UserId(session.user_id),
            book_id=BookId(book_id) if book_id is not None else None,
            preset_id=PresetId(preset_id) if preset_id is not None else None,
            data=data or {},
        )

    async def _audit(
        self,
        session: Session,
        action: AuditAction,
        entity_type: str,
        entity_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        try:
            await self.audit_trail.record(
                UserId(session.user_id), action, entity_type, entity_id, details
            )
        except Exception:
            logger.warning(
                "audit_write_failed",
                user_id=session.user_id,
                action=str(action),
                exc_info=True,
            )
