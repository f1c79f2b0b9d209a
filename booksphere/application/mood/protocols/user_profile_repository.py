from typing import Protocol

from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.identity.entities.user import User


class UserProfileRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def save_preferences(self, user: User) -> User: ...
