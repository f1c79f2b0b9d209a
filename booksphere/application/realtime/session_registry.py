"""
Session registry and room broadcast.

Rooms are keyed ``book:<bookId>``. Membership is a set per session, so the
registry itself supports several rooms at once; whether switching books
leaves the previous room is decided by the dispatcher.

Membership changes and broadcasts for one room run under that room's lock and
only enqueue onto session outboxes, so they are linearized against each
other: a session never receives a broadcast for a room it already left, and
never misses one sent after its join completed. Different rooms never share a
lock.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import structlog

from booksphere.application.realtime.events import (
    OutboundMessage,
    user_joined_message,
    user_left_message,
)
from booksphere.application.realtime.session import Session
from booksphere.application.sync.services.delta_sync_reconciler import current_millis

logger = structlog.get_logger(__name__)


def room_name(book_id: int) -> str:
    return f"book:{book_id}"


class SessionRegistry:
    def __init__(self, clock: Callable[[], int] = current_millis) -> None:
        self.clock = clock
        self._sessions: dict[str, Session] = {}
        self._rooms: dict[str, set[str]] = {}
        self._room_locks: dict[str, asyncio.Lock] = {}
        self._lock_holders: dict[str, int] = {}

    def register(self, session: Session) -> None:
        self._sessions[session.id] = session
        logger.info(
            "session_registered",
            session_id=session.id,
            user_id=session.user_id,
            active_sessions=len(self._sessions),
        )

    def members(self, room: str) -> list[Session]:
        return [
            self._sessions[session_id]
            for session_id in self._rooms.get(room, ())
            if session_id in self._sessions
        ]

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    @asynccontextmanager
    async def _room_lock(self, room: str) -> AsyncIterator[None]:
        """Hold the room's lock; it is dropped once the room is gone and nobody waits on it."""
        lock = self._room_locks.setdefault(room, asyncio.Lock())
        self._lock_holders[room] = self._lock_holders.get(room, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[room] -= 1
            if not self._lock_holders[room]:
                del self._lock_holders[room]
                if room not in self._rooms:
                    del self._room_locks[room]

    async def join(self, session: Session, book_id: int) -> bool:
        """
        Add ``session`` to ``book:<book_id>`` and announce it to the other members.

        Returns:
            False when the session was already a member (nothing is sent)
        """
        room = room_name(book_id)
        async with self._room_lock(room):
            members = self._rooms.setdefault(room, set())
            if session.id in members:
                return False

            announcement = user_joined_message(session.user_id, session.username, self.clock())
            self._deliver(room, announcement, exclude=session)
            members.add(session.id)
            session.rooms.add(room)

        logger.info("room_joined", session_id=session.id, user_id=session.user_id, room=room)
        return True

    async def leave(self, session: Session, book_id: int) -> bool:
        """
        Remove ``session`` from ``book:<book_id>`` and tell the remaining members.

        Returns:
            False when the session was not a member (safe no-op)
        """
        room = room_name(book_id)
        async with self._room_lock(room):
            members = self._rooms.get(room)
            if not members or session.id not in members:
                return False

            members.discard(session.id)
            session.rooms.discard(room)
            session.presets.pop(room, None)
            if not members:
                del self._rooms[room]

            announcement = user_left_message(session.user_id, session.username, self.clock())
            self._deliver(room, announcement)

        logger.info("room_left", session_id=session.id, user_id=session.user_id, room=room)
        return True

    async def broadcast(
        self, room: str, message: OutboundMessage, exclude: Session | None = None
    ) -> int:
        """
        Deliver ``message`` to every current member of ``room`` but ``exclude``.

        Returns:
            Number of sessions the message was queued for
        """
        async with self._room_lock(room):
            delivered = self._deliver(room, message, exclude=exclude)

        logger.debug(
            "room_broadcast",
            room=room,
            message_event=message.event.value,
            delivered=delivered,
        )
        return delivered

    def send(self, session: Session, message: OutboundMessage) -> bool:
        return session.send(message)

    async def disconnect(self, session: Session) -> None:
        """Leave every room (notifying members), forget the session and stop its writer."""
        for room in sorted(session.rooms):
            await self.leave(session, int(room.removeprefix("book:")))

        self._sessions.pop(session.id, None)
        session.close()
        logger.info(
            "session_unregistered",
            session_id=session.id,
            user_id=session.user_id,
            active_sessions=len(self._sessions),
        )

    def _deliver(self, room: str, message: OutboundMessage, exclude: Session | None = None) -> int:
        # Caller holds the room lock.
        delivered = 0
        for session_id in self._rooms.get(room, ()):
            if exclude is not None and session_id == exclude.id:
                continue
            session = self._sessions.get(session_id)
            if session is not None and session.send(message):
                delivered += 1
        return delivered
