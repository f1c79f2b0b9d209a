"""Identity module domain layer."""

from .entities.user import ReaderPreferences, Theme, User, UserRole

__all__ = [
    "ReaderPreferences",
    "Theme",
    "User",
    "UserRole",
]
