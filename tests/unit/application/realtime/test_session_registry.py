"""Tests for SessionRegistry room membership and broadcast."""

import asyncio

import pytest

from booksphere.application.realtime.events import (
    OutboundEvent,
    OutboundMessage,
    pong_message,
)
from booksphere.application.realtime.session import Session
from booksphere.application.realtime.session_registry import SessionRegistry, room_name


def _drain(session: Session) -> list[OutboundMessage]:
    messages = []
    while not session.outbox.empty():
        message = session.outbox.get_nowait()
        if message is not None:
            messages.append(message)
    return messages


def _events(session: Session) -> list[OutboundEvent]:
    return [message.event for message in _drain(session)]


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry(clock=lambda: 1234)


def _connect(registry: SessionRegistry, user_id: int, username: str) -> Session:
    session = Session(user_id=user_id, username=username)
    registry.register(session)
    return session


class TestJoinLeave:
    @pytest.mark.asyncio
    async def test_join_announces_to_existing_members_only(
        self, registry: SessionRegistry
    ) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")

        assert await registry.join(alice, 42)
        assert await registry.join(bob, 42)

        alice_messages = _drain(alice)
        assert [message.event for message in alice_messages] == [OutboundEvent.USER_JOINED]
        assert alice_messages[0].data == {"userId": 2, "username": "bob", "timestamp": 1234}
        assert _drain(bob) == []
        assert {session.id for session in registry.members("book:42")} == {alice.id, bob.id}

    @pytest.mark.asyncio
    async def test_duplicate_join_is_a_no_op(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        await registry.join(alice, 42)
        await registry.join(bob, 42)
        _drain(alice)

        assert not await registry.join(bob, 42)
        assert _drain(alice) == []
        assert len(registry.members("book:42")) == 2

    @pytest.mark.asyncio
    async def test_leave_announces_to_remaining_members(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        await registry.join(alice, 42)
        await registry.join(bob, 42)
        _drain(alice)

        assert await registry.leave(bob, 42)

        assert _events(alice) == [OutboundEvent.USER_LEFT]
        assert "book:42" not in bob.rooms

    @pytest.mark.asyncio
    async def test_leave_for_non_member_is_safe(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        assert not await registry.leave(alice, 42)

    @pytest.mark.asyncio
    async def test_sessions_can_hold_several_rooms(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        await registry.join(alice, 42)
        await registry.join(alice, 7)
        assert alice.rooms == {"book:42", "book:7"}


class TestBroadcast:
    @pytest.mark.asyncio
    async def test_broadcast_reaches_room_members_only(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        carol = _connect(registry, 3, "carol")
        await registry.join(alice, 42)
        await registry.join(bob, 42)
        await registry.join(carol, 7)
        for session in (alice, bob, carol):
            _drain(session)

        delivered = await registry.broadcast(room_name(42), pong_message(1), exclude=alice)

        assert delivered == 1
        assert _events(bob) == [OutboundEvent.PONG]
        assert _drain(alice) == []
        assert _drain(carol) == []

    @pytest.mark.asyncio
    async def test_departed_session_receives_nothing(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        await registry.join(alice, 42)
        await registry.join(bob, 42)
        await registry.leave(bob, 42)
        _drain(bob)

        delivered = await registry.broadcast(room_name(42), pong_message(1))

        assert delivered == 1
        assert _drain(bob) == []

    @pytest.mark.asyncio
    async def test_broadcast_to_unknown_room(self, registry: SessionRegistry) -> None:
        assert await registry.broadcast("book:999", pong_message(1)) == 0

    @pytest.mark.asyncio
    async def test_concurrent_joins_and_broadcasts_are_linearized(
        self, registry: SessionRegistry
    ) -> None:
        sender = _connect(registry, 1, "sender")
        await registry.join(sender, 42)
        readers = [_connect(registry, index, f"reader{index}") for index in range(2, 12)]

        await asyncio.gather(
            *(registry.join(reader, 42) for reader in readers),
            *(registry.broadcast("book:42", pong_message(i), exclude=sender) for i in range(5)),
        )
        delivered = await registry.broadcast("book:42", pong_message(99), exclude=sender)

        # Everyone joined before the last broadcast receives it
        assert delivered == len(readers)
        for reader in readers:
            assert _drain(reader)[-1].data == {"timestamp": 99}


class TestDisconnect:
    @pytest.mark.asyncio
    async def test_disconnect_leaves_every_room_and_closes(
        self, registry: SessionRegistry
    ) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        carol = _connect(registry, 3, "carol")
        await registry.join(alice, 42)
        await registry.join(alice, 7)
        await registry.join(bob, 42)
        await registry.join(carol, 7)
        for session in (bob, carol):
            _drain(session)

        await registry.disconnect(alice)

        assert _events(bob) == [OutboundEvent.USER_LEFT]
        assert _events(carol) == [OutboundEvent.USER_LEFT]
        assert alice.closed
        assert registry.session_count == 2
        assert not alice.send(pong_message(1))

    @pytest.mark.asyncio
    async def test_last_member_leaving_removes_room(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        await registry.join(alice, 42)
        await registry.disconnect(alice)
        assert registry.members("book:42") == []


class TestRoomLocks:
    @pytest.mark.asyncio
    async def test_lock_is_dropped_with_the_room(self, registry: SessionRegistry) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        await registry.join(alice, 42)
        await registry.join(bob, 42)

        await registry.leave(alice, 42)
        assert "book:42" in registry._room_locks

        await registry.leave(bob, 42)
        assert registry._room_locks == {}

    @pytest.mark.asyncio
    async def test_broadcast_to_unknown_room_keeps_no_lock(
        self, registry: SessionRegistry
    ) -> None:
        await registry.broadcast("book:999", pong_message(1))
        assert registry._room_locks == {}

    @pytest.mark.asyncio
    async def test_room_emptied_and_rejoined_keeps_one_lock(
        self, registry: SessionRegistry
    ) -> None:
        alice = _connect(registry, 1, "alice")
        bob = _connect(registry, 2, "bob")
        await registry.join(alice, 42)

        # The leave empties the room and the join recreates it in the same tick
        await asyncio.gather(registry.leave(alice, 42), registry.join(bob, 42))

        assert [session.id for session in registry.members("book:42")] == [bob.id]
        assert "book:42" in registry._room_locks
        await registry.disconnect(bob)
        assert registry._room_locks == {}
