"""Tests for ClientConnection's reader, dispatcher and writer loops."""

from typing import Any

import pytest
from fastapi import WebSocketDisconnect

from booksphere.application.realtime.events import pong_message
from booksphere.application.realtime.session import Session
from booksphere.infrastructure.realtime.connection import ClientConnection


class FakeWebSocket:
    def __init__(self, frames: list[str], fail_sends: bool = False) -> None:
        self.frames = frames
        self.fail_sends = fail_sends
        self.sent: list[dict[str, Any]] = []

    async def receive_text(self) -> str:
        if not self.frames:
            raise WebSocketDisconnect(code=1000)
        return self.frames.pop(0)

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.fail_sends:
            raise RuntimeError("socket already closed")
        self.sent.append(data)


class FakeDispatcher:
    def __init__(self, fail_dispatch: bool = False) -> None:
        self.fail_dispatch = fail_dispatch
        self.dispatched: list[Any] = []
        self.disconnected: list[Session] = []

    async def on_connect(self, session: Session) -> None:
        session.send(pong_message(1))

    async def dispatch(self, session: Session, frame: Any) -> None:  # noqa: ANN401
        if self.fail_dispatch:
            raise RuntimeError("handler crashed")
        self.dispatched.append(frame)

    async def on_disconnect(self, session: Session) -> None:
        self.disconnected.append(session)
        session.close()


def _connection(
    websocket: FakeWebSocket, dispatcher: FakeDispatcher
) -> tuple[ClientConnection, Session]:
    session = Session(user_id=1, username="alice")
    return ClientConnection(websocket, session, dispatcher), session  # type: ignore[arg-type]


class TestClientConnection:
    @pytest.mark.asyncio
    async def test_frames_are_dispatched_then_session_released(self) -> None:
        websocket = FakeWebSocket(['{"event": "ping"}', "{not json"])
        dispatcher = FakeDispatcher()
        connection, session = _connection(websocket, dispatcher)

        await connection.run()

        assert dispatcher.dispatched == [{"event": "ping"}]
        assert dispatcher.disconnected == [session]
        assert [frame["event"] for frame in websocket.sent] == ["pong", "error"]

    @pytest.mark.asyncio
    async def test_failed_send_closes_the_session(self) -> None:
        websocket = FakeWebSocket([], fail_sends=True)
        connection, session = _connection(websocket, FakeDispatcher())
        session.send(pong_message(1))

        await connection._write_loop()

        assert session.closed
        assert not session.send(pong_message(2))

    @pytest.mark.asyncio
    async def test_crashed_dispatch_loop_still_releases_session(self) -> None:
        websocket = FakeWebSocket(['{"event": "ping"}'])
        dispatcher = FakeDispatcher(fail_dispatch=True)
        connection, session = _connection(websocket, dispatcher)

        await connection.run()

        assert dispatcher.disconnected == [session]
        assert session.closed
