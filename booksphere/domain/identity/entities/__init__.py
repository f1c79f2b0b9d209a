from .user import ReaderPreferences, Theme, User, UserRole

__all__ = ["ReaderPreferences", "Theme", "User", "UserRole"]
