"""Process-local sync event store."""

from collections import deque

from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.sync.entities.sync_event import SyncEvent


class InMemorySyncEventStore:
    """
    Per-user ring buffers held in process memory.

    Each buffer is a ``deque(maxlen=capacity)`` so appending past the cap
    drops the oldest event regardless of its type. Contents are lost on
    restart. Methods never await, so each call is atomic on the event loop.
    """

    def __init__(self, capacity: int = 1000) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._buffers: dict[int, deque[SyncEvent]] = {}

    async def append(self, user_id: UserId, event: SyncEvent) -> None:
        buffer = self._buffers.get(user_id.value)
        if buffer is None:
            buffer = deque(maxlen=self.capacity)
            self._buffers[user_id.value] = buffer
        buffer.append(event)

    async def list_events(self, user_id: UserId) -> list[SyncEvent]:
        return list(self._buffers.get(user_id.value, ()))

    async def clear(self, user_id: UserId) -> None:
        self._buffers.pop(user_id.value, None)
