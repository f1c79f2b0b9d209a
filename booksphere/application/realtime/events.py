"""Websocket event names, error codes and outbound message builders."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class InboundEvent(StrEnum):
    PROGRESS_UPDATE = "progress:update"
    ROOM_JOIN = "room:join"
    ROOM_LEAVE = "room:leave"
    SETTINGS_UPDATE = "settings:update"
    SYNC_EVENT = "sync:event"
    SYNC_STATUS_REQUEST = "sync:status_request"
    SYNC_RECOVER = "sync:recover"
    MOOD_MANUAL_TRIGGER = "mood:manual_trigger"
    MOOD_PREFERENCES_UPDATE = "mood:preferences_update"
    PING = "ping"


class OutboundEvent(StrEnum):
    MOOD_TRIGGER = "mood:trigger"
    SYNC_STATUS = "sync:status"
    USER_JOINED = "user:joined"
    USER_LEFT = "user:left"
    SYNC_RECOVERY = "sync:recovery"
    PONG = "pong"
    ERROR = "error"


class SyncStatus(StrEnum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    SYNCING = "syncing"
    ERROR = "error"


class ErrorCode(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_IN_ROOM = "NOT_IN_ROOM"
    UNKNOWN_EVENT = "UNKNOWN_EVENT"
    PROGRESS_UPDATE_ERROR = "PROGRESS_UPDATE_ERROR"
    ROOM_JOIN_ERROR = "ROOM_JOIN_ERROR"
    ROOM_LEAVE_ERROR = "ROOM_LEAVE_ERROR"
    SETTINGS_UPDATE_ERROR = "SETTINGS_UPDATE_ERROR"
    SYNC_EVENT_ERROR = "SYNC_EVENT_ERROR"
    SYNC_STATUS_ERROR = "SYNC_STATUS_ERROR"
    SYNC_RECOVERY_ERROR = "SYNC_RECOVERY_ERROR"
    USER_NOT_FOUND = "USER_NOT_FOUND"


@dataclass(frozen=True)
class OutboundMessage:
    event: OutboundEvent
    data: dict[str, Any] = field(default_factory=dict)

    def to_frame(self) -> dict[str, Any]:
        return {"event": self.event.value, "data": self.data}


def mood_trigger_message(
    mood_name: str,
    tempo: int,
    transition_type: str,
    background_image_url: str | None,
    timestamp: int,
) -> OutboundMessage:
    return OutboundMessage(
        OutboundEvent.MOOD_TRIGGER,
        {
            "moodName": mood_name,
            "tempo": tempo,
            "transitionType": transition_type,
            "backgroundImageUrl": background_image_url,
            "timestamp": timestamp,
        },
    )


def sync_status_message(
    status: SyncStatus, message: str, timestamp: int, **extra: Any  # noqa: ANN401
) -> OutboundMessage:
    return OutboundMessage(
        OutboundEvent.SYNC_STATUS,
        {"status": status.value, "message": message, "timestamp": timestamp, **extra},
    )


def user_joined_message(user_id: int, username: str, timestamp: int) -> OutboundMessage:
    return OutboundMessage(
        OutboundEvent.USER_JOINED,
        {"userId": user_id, "username": username, "timestamp": timestamp},
    )


def user_left_message(user_id: int, username: str, timestamp: int) -> OutboundMessage:
    return OutboundMessage(
        OutboundEvent.USER_LEFT,
        {"userId": user_id, "username": username, "timestamp": timestamp},
    )


def sync_recovery_message(events: list[dict[str, Any]], timestamp: int) -> OutboundMessage:
    return OutboundMessage(OutboundEvent.SYNC_RECOVERY, {"events": events, "timestamp": timestamp})


def pong_message(timestamp: int) -> OutboundMessage:
    return OutboundMessage(OutboundEvent.PONG, {"timestamp": timestamp})


def error_message(message: str, code: ErrorCode | None = None) -> OutboundMessage:
    data: dict[str, Any] = {"message": message}
    if code is not None:
        data["code"] = code.value
    return OutboundMessage(OutboundEvent.ERROR, data)
