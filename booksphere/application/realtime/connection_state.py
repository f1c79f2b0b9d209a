"""Per-connection lifecycle state machine."""

from enum import StrEnum

from booksphere.domain.common.exceptions import InvalidStateTransitionError


class ConnectionState(StrEnum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    IDLE = "idle"
    IN_ROOM = "in_room"
    DISCONNECTED = "disconnected"


_TRANSITIONS: dict[ConnectionState, frozenset[ConnectionState]] = {
    ConnectionState.CONNECTING: frozenset(
        {ConnectionState.AUTHENTICATED, ConnectionState.DISCONNECTED}
    ),
    ConnectionState.AUTHENTICATED: frozenset({ConnectionState.IDLE, ConnectionState.DISCONNECTED}),
    ConnectionState.IDLE: frozenset({ConnectionState.IN_ROOM, ConnectionState.DISCONNECTED}),
    # IN_ROOM -> IN_ROOM covers switching books without an explicit leave
    ConnectionState.IN_ROOM: frozenset(
        {ConnectionState.IN_ROOM, ConnectionState.IDLE, ConnectionState.DISCONNECTED}
    ),
    ConnectionState.DISCONNECTED: frozenset(),
}


class ConnectionStateMachine:
    """
    Connecting -> Authenticated -> Idle <-> InRoom -> Disconnected.

    Disconnected is terminal. Any other move raises
    InvalidStateTransitionError and leaves the state unchanged.
    """

    def __init__(self, state: ConnectionState = ConnectionState.CONNECTING) -> None:
        self._state = state

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_in_room(self) -> bool:
        return self._state is ConnectionState.IN_ROOM

    @property
    def is_closed(self) -> bool:
        return self._state is ConnectionState.DISCONNECTED

    def can_transition(self, target: ConnectionState) -> bool:
        return target in _TRANSITIONS[self._state]

    def transition(self, target: ConnectionState) -> None:
        if not self.can_transition(target):
            raise InvalidStateTransitionError(self._state.value, target.value)
        self._state = target

    def __repr__(self) -> str:
        return f"ConnectionStateMachine(state={self._state.value})"
