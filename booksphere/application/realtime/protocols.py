"""Async ports the realtime dispatcher uses to reach the stores."""

from typing import Any, Protocol

from booksphere.domain.identity.entities.user import User
from booksphere.domain.mood.services.mood_resolver import MoodTriggerOutcome


class ReaderProfileGatewayProtocol(Protocol):
    async def get_user(self, user_id: int) -> User: ...

    async def update_preferences(
        self, user_id: int, **changes: Any  # noqa: ANN401
    ) -> dict[str, tuple[Any, Any]]: ...


class MoodGatewayProtocol(Protocol):
    async def resolve(
        self,
        preset_id: int,
        chapter: int,
        page_fraction: float,
        genre: str,
        sensitivity: float,
    ) -> MoodTriggerOutcome | None: ...

    async def default_preset_id(self, book_id: int) -> int | None: ...


class BackgroundUrlSignerProtocol(Protocol):
    def generate(self, filepath: str, user_id: int | None = None) -> str: ...
