"""Realtime application module: connection lifecycle, sessions and room broadcast."""

from .connection_state import ConnectionState, ConnectionStateMachine
from .events import ErrorCode, InboundEvent, OutboundEvent, OutboundMessage, SyncStatus
from .session import NotInRoomError, Session
from .session_registry import SessionRegistry, room_name

__all__ = [
    "ConnectionState",
    "ConnectionStateMachine",
    "ErrorCode",
    "InboundEvent",
    "NotInRoomError",
    "OutboundEvent",
    "OutboundMessage",
    "Session",
    "SessionRegistry",
    "SyncStatus",
    "room_name",
]
