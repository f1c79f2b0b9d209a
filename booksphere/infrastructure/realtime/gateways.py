"""
Async access to the SQL stores for websocket handlers.

Websocket handlers live longer than a request, so they cannot borrow the
request-scoped session. Every call here opens its own session and runs the
synchronous use case in the threadpool.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from booksphere.application.mood.use_cases.mood_rule_store_use_case import MoodRuleStoreUseCase
from booksphere.application.mood.use_cases.reader_preferences_use_case import (
    ReaderPreferencesUseCase,
)
from booksphere.application.mood.use_cases.resolve_mood_trigger_use_case import (
    ResolveMoodTriggerUseCase,
)
from booksphere.domain.identity.entities.user import User
from booksphere.domain.mood.services.mood_resolver import MoodResolver, MoodTriggerOutcome
from booksphere.domain.mood.services.trigger_rule_selector import TriggerRuleSelector
from booksphere.infrastructure.identity.repositories.user_profile_repository import (
    UserProfileRepository,
)
from booksphere.infrastructure.mood.repositories import (
    MoodMapRepository,
    MoodReferenceRepository,
    PresetRepository,
    TriggerRuleRepository,
)


class ReaderProfileGateway:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    async def get_user(self, user_id: int) -> User:
        return await run_in_threadpool(self._get_user, user_id)

    async def update_preferences(
        self, user_id: int, **changes: Any  # noqa: ANN401
    ) -> dict[str, tuple[Any, Any]]:
        return await run_in_threadpool(self._update_preferences, user_id, changes)

    def _get_user(self, user_id: int) -> User:
        with self.session_factory() as db:
            return ReaderPreferencesUseCase(UserProfileRepository(db)).get_user(user_id)

    def _update_preferences(
        self, user_id: int, changes: dict[str, Any]
    ) -> dict[str, tuple[Any, Any]]:
        with self.session_factory() as db:
            use_case = ReaderPreferencesUseCase(UserProfileRepository(db))
            return use_case.update_preferences(user_id, **changes)


class MoodGateway:
    def __init__(self, session_factory: Callable[[], Session], mood_resolver: MoodResolver) -> None:
        self.session_factory = session_factory
        self.mood_resolver = mood_resolver

    async def resolve(
        self,
        preset_id: int,
        chapter: int,
        page_fraction: float,
        genre: str,
        sensitivity: float,
    ) -> MoodTriggerOutcome | None:
        return await run_in_threadpool(
            self._resolve, preset_id, chapter, page_fraction, genre, sensitivity
        )

    async def default_preset_id(self, book_id: int) -> int | None:
        return await run_in_threadpool(self._default_preset_id, book_id)

    def _resolve(
        self,
        preset_id: int,
        chapter: int,
        page_fraction: float,
        genre: str,
        sensitivity: float,
    ) -> MoodTriggerOutcome | None:
        with self.session_factory() as db:
            use_case = ResolveMoodTriggerUseCase(
                mood_map_repository=MoodMapRepository(db),
                mood_reference_repository=MoodReferenceRepository(db),
                mood_resolver=self.mood_resolver,
            )
            return use_case.resolve(preset_id, chapter, page_fraction, genre, sensitivity)

    def _default_preset_id(self, book_id: int) -> int | None:
        with self.session_factory() as db:
            use_case = MoodRuleStoreUseCase(
                trigger_rule_repository=TriggerRuleRepository(db),
                preset_repository=PresetRepository(db),
                trigger_rule_selector=TriggerRuleSelector(),
            )
            preset = use_case.default_preset_for_book(book_id)
            return preset.id.value if preset else None
