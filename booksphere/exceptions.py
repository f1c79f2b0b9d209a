"""Custom exception hierarchy for the Book Sphere API."""

from fastapi import HTTPException
from starlette import status


class BookSphereError(Exception):
    """Base exception for all Book Sphere errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(BookSphereError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class PresetNotFoundError(NotFoundError):
    """Preset not found error."""

    def __init__(self, preset_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with preset ID or custom message."""
        self.preset_id = preset_id
        if message:
            super().__init__(message)
        elif preset_id is not None:
            super().__init__(f"Preset with id {preset_id} not found")
        else:
            super().__init__("Preset not found")


class UserNotFoundError(NotFoundError):
    """User profile not found error."""

    def __init__(self, user_id: int) -> None:
        """Initialize with the missing user's ID."""
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
