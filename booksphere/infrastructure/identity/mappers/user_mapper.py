"""Mapper for User ORM ↔ Domain conversion."""

from booksphere.domain.common.value_objects.ids import UserId
from booksphere.domain.identity.entities.user import ReaderPreferences, Theme, User, UserRole
from booksphere.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        return User(
            id=UserId(orm_model.id),
            username=orm_model.username,
            role=UserRole(orm_model.role),
            preferences=ReaderPreferences(
                mood_sensitivity=orm_model.mood_sensitivity,
                music_volume=orm_model.music_volume,
                dynamic_background=orm_model.dynamic_background,
                theme=Theme(orm_model.theme),
            ),
        )

    def apply_preferences(self, domain_entity: User, orm_model: UserORM) -> UserORM:
        """Copy the preference columns onto an existing row."""
        preferences = domain_entity.preferences
        orm_model.mood_sensitivity = preferences.mood_sensitivity
        orm_model.music_volume = preferences.music_volume
        orm_model.dynamic_background = preferences.dynamic_background
        orm_model.theme = preferences.theme.value
        return orm_model
