"""Ephemeral server-side record of one live connection."""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from booksphere.application.realtime.connection_state import ConnectionStateMachine
from booksphere.application.realtime.events import OutboundMessage
from booksphere.domain.common.exceptions import DomainError


@dataclass(eq=False)
class Session:
    """
    One live connection.

    ``outbox`` is drained by the connection's writer task; ``None`` is the
    stop sentinel. ``presets`` remembers the preset bound to each joined room.
    """

    user_id: int
    username: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    state: ConnectionStateMachine = field(default_factory=ConnectionStateMachine)
    rooms: set[str] = field(default_factory=set)
    presets: dict[str, int | None] = field(default_factory=dict)
    outbox: asyncio.Queue[OutboundMessage | None] = field(default_factory=asyncio.Queue)
    closed: bool = False

    def send(self, message: OutboundMessage) -> bool:
        """Queue ``message`` for delivery. Returns False once the session is closed."""
        if self.closed:
            return False
        self.outbox.put_nowait(message)
        return True

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.outbox.put_nowait(None)

    def preset_for_room(self, room: str) -> int | None:
        return self.presets.get(room)

    def __repr__(self) -> str:
        return f"Session(id={self.id}, user_id={self.user_id}, state={self.state.state.value})"


class NotInRoomError(DomainError):
    """Raised when a session acts on a book room it has not joined."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Not in room book:{book_id}", {"book_id": book_id})
        self.book_id = book_id
