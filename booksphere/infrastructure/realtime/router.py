import structlog
from fastapi import APIRouter, WebSocket, status

from booksphere.application.realtime.connection_state import ConnectionState
from booksphere.application.realtime.session import Session
from booksphere.core import container
from booksphere.infrastructure.identity.dependencies import authenticate_websocket
from booksphere.infrastructure.realtime.connection import ClientConnection

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def reading_socket(websocket: WebSocket) -> None:
    """
    Realtime reading channel.

    The bearer credential comes from ``?token=`` or the Authorization header.
    A missing, invalid or expired credential closes the socket with policy
    violation before it is accepted, so no session ever exists for it.
    """
    user = await authenticate_websocket(websocket)
    if user is None:
        logger.warning("websocket_rejected", client=str(websocket.client))
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    session = Session(user_id=user.id.value, username=user.username)
    session.state.transition(ConnectionState.AUTHENTICATED)

    connection = ClientConnection(websocket, session, container.message_dispatcher())
    await connection.run()
