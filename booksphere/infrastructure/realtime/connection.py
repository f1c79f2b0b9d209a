"""Per-connection reader, dispatcher and writer loops."""

import asyncio
import json
from typing import Any

import structlog
from fastapi import WebSocket, WebSocketDisconnect

from booksphere.application.realtime.events import ErrorCode, error_message
from booksphere.application.realtime.session import Session
from booksphere.infrastructure.realtime.dispatcher import MessageDispatcher

logger = structlog.get_logger(__name__)


class ClientConnection:
    """
    Drives one accepted websocket.

    The reader pushes decoded frames onto ``inbound``; a single dispatcher
    task consumes them in order, so one client's events are handled
    sequentially. A writer task drains the session outbox, which is the only
    place frames are sent from. When the client goes away, frames already
    queued are still dispatched (nothing in flight is cancelled) before the
    session is released.
    """

    def __init__(
        self, websocket: WebSocket, session: Session, dispatcher: MessageDispatcher
    ) -> None:
        self.websocket = websocket
        self.session = session
        self.dispatcher = dispatcher
        self.inbound: asyncio.Queue[Any] = asyncio.Queue()

    async def run(self) -> None:
        writer = asyncio.create_task(self._write_loop())
        await self.dispatcher.on_connect(self.session)
        worker = asyncio.create_task(self._dispatch_loop())
        try:
            await self._read_loop()
        finally:
            # Cleanup runs to completion even if this task is cancelled
            await asyncio.shield(self._shutdown(worker, writer))

    async def _shutdown(self, worker: asyncio.Task[None], writer: asyncio.Task[None]) -> None:
        await self.inbound.put(None)
        try:
            await worker
        except Exception:
            logger.error(
                "websocket_dispatch_loop_failed",
                user_id=self.session.user_id,
                session_id=self.session.id,
                exc_info=True,
            )
        finally:
            await self.dispatcher.on_disconnect(self.session)
            await writer

    async def _read_loop(self) -> None:
        while True:
            try:
                text = await self.websocket.receive_text()
            except WebSocketDisconnect:
                return
            except KeyError:
                # Binary frame
                self.session.send(
                    error_message("Frames must be JSON text", ErrorCode.VALIDATION_ERROR)
                )
                continue

            try:
                frame = json.loads(text)
            except ValueError:
                self.session.send(error_message("Invalid JSON", ErrorCode.VALIDATION_ERROR))
                continue
            await self.inbound.put(frame)

    async def _dispatch_loop(self) -> None:
        while True:
            frame = await self.inbound.get()
            if frame is None:
                return
            await self.dispatcher.dispatch(self.session, frame)

    async def _write_loop(self) -> None:
        while True:
            message = await self.session.outbox.get()
            if message is None:
                return
            try:
                await self.websocket.send_json(message.to_frame())
            except Exception:
                logger.debug(
                    "websocket_send_failed",
                    session_id=self.session.id,
                    message_event=message.event.value,
                    exc_info=True,
                )
                # Nobody drains the outbox any more; stop queueing for this session
                self.session.close()
                return
