"""Repository for reader profiles."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.identity.entities.user import User
from booksphere.exceptions import UserNotFoundError
from booksphere.infrastructure.identity.mappers.user_mapper import UserMapper
from booksphere.models import User as UserORM

logger = logging.getLogger(__name__)


class UserProfileRepository:
    """Repository for reader profiles."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save_preferences(self, user: User) -> User:
        """
        Persist the user's playback preferences.

        Raises:
            UserNotFoundError: If the profile row no longer exists
        """
        stmt = select(UserORM).where(UserORM.id == user.id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            raise UserNotFoundError(user.id.value)

        orm_model = self.mapper.apply_preferences(user, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"Updated preferences for user {user.id.value}")
        return self.mapper.to_domain(orm_model)
