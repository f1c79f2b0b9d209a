from typing import Protocol

from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.sync.entities.sync_event import SyncEvent


class SyncEventStoreProtocol(Protocol):
    """
    Bounded per-user event log backing the reconciler.

    Implementations evict oldest-first once a user's buffer holds
    ``capacity`` events. Order is arrival order.
    """

    async def append(self, user_id: UserId, event: SyncEvent) -> None: ...

    async def list_events(self, user_id: UserId) -> list[SyncEvent]: ...

    async def clear(self, user_id: UserId) -> None: ...
