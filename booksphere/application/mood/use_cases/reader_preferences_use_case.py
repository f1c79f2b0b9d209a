"""Use case for reading and updating a reader's playback preferences."""

from typing import Any

import structlog

from booksphere.application.mood.protocols.user_profile_repository import (
    UserProfileRepositoryProtocol,
)
from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.identity.entities.user import User
from booksphere.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


class ReaderPreferencesUseCase:
    """Profile-store access used by authentication and the dispatch pipeline."""

    def __init__(self, user_repository: UserProfileRepositoryProtocol) -> None:
        self.user_repository = user_repository

    def get_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundError: If no profile exists for ``user_id``
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_preferences(
        self, user_id: int, **changes: Any  # noqa: ANN401
    ) -> dict[str, tuple[Any, Any]]:
        """
        Apply a partial preferences update and persist it.

        Returns:
            ``{field: (old, new)}`` for every field that actually changed
        """
        user = self.get_user(user_id)
        changed = user.update_preferences(**changes)
        if changed:
            self.user_repository.save_preferences(user)
            logger.info(
                "reader_preferences_updated", user_id=user_id, changed_fields=sorted(changed)
            )
        return changed
