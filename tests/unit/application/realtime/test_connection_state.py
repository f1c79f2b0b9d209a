"""Tests for the per-connection state machine."""

import pytest

from booksphere.application.realtime.connection_state import (
    ConnectionState,
    ConnectionStateMachine,
)
from booksphere.domain.common.exceptions import InvalidStateTransitionError


class TestConnectionStateMachine:
    def test_full_lifecycle(self) -> None:
        machine = ConnectionStateMachine()
        for state in (
            ConnectionState.AUTHENTICATED,
            ConnectionState.IDLE,
            ConnectionState.IN_ROOM,
            ConnectionState.IDLE,
            ConnectionState.IN_ROOM,
            ConnectionState.DISCONNECTED,
        ):
            machine.transition(state)
        assert machine.is_closed

    def test_switching_rooms_stays_in_room(self) -> None:
        machine = ConnectionStateMachine(ConnectionState.IN_ROOM)
        machine.transition(ConnectionState.IN_ROOM)
        assert machine.is_in_room

    def test_cannot_join_before_authentication(self) -> None:
        machine = ConnectionStateMachine()
        with pytest.raises(InvalidStateTransitionError):
            machine.transition(ConnectionState.IN_ROOM)
        assert machine.state is ConnectionState.CONNECTING

    @pytest.mark.parametrize(
        "target",
        [
            ConnectionState.CONNECTING,
            ConnectionState.AUTHENTICATED,
            ConnectionState.IDLE,
            ConnectionState.IN_ROOM,
            ConnectionState.DISCONNECTED,
        ],
    )
    def test_disconnected_is_terminal(self, target: ConnectionState) -> None:
        machine = ConnectionStateMachine(ConnectionState.DISCONNECTED)
        assert not machine.can_transition(target)

    def test_any_live_state_can_disconnect(self) -> None:
        for state in (
            ConnectionState.CONNECTING,
            ConnectionState.AUTHENTICATED,
            ConnectionState.IDLE,
            ConnectionState.IN_ROOM,
        ):
            assert ConnectionStateMachine(state).can_transition(ConnectionState.DISCONNECTED)
