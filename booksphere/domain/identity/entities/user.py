"""Reader profile entity and preferences."""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_object import ValueObject
from booksphere.domain.common.value_objects.ids import UserId

MIN_MOOD_SENSITIVITY = 0.1
MAX_MOOD_SENSITIVITY = 2.0
MAX_MUSIC_VOLUME = 100


class UserRole(StrEnum):
    READER = "reader"
    CREATOR = "creator"
    ADMIN = "admin"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class ReaderPreferences(ValueObject):
    """
    Per-reader playback preferences.

    ``mood_sensitivity`` is ``None`` when the reader never set one; callers
    fall back to the configured default.
    """

    mood_sensitivity: float | None = None
    music_volume: int = 70
    dynamic_background: bool = True
    theme: Theme = Theme.LIGHT

    def __post_init__(self) -> None:
        if self.mood_sensitivity is not None and not (
            MIN_MOOD_SENSITIVITY <= self.mood_sensitivity <= MAX_MOOD_SENSITIVITY
        ):
            raise ValidationError(
                f"Mood sensitivity must be between {MIN_MOOD_SENSITIVITY} and "
                f"{MAX_MOOD_SENSITIVITY}",
                field="mood_sensitivity",
                value=self.mood_sensitivity,
            )
        if not 0 <= self.music_volume <= MAX_MUSIC_VOLUME:
            raise ValidationError(
                f"Music volume must be between 0 and {MAX_MUSIC_VOLUME}",
                field="music_volume",
                value=self.music_volume,
            )

    def with_updates(self, **changes: Any) -> "ReaderPreferences":  # noqa: ANN401
        """Return a copy with the given fields replaced (``None`` values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def diff(self, other: "ReaderPreferences") -> dict[str, tuple[Any, Any]]:
        """Map of field name to (old, new) for every field that differs in ``other``."""
        changed: dict[str, tuple[Any, Any]] = {}
        for name in ("mood_sensitivity", "music_volume", "dynamic_background", "theme"):
            old, new = getattr(self, name), getattr(other, name)
            if old != new:
                changed[name] = (old, new)
        return changed


@dataclass(eq=False)
class User(Entity[UserId]):
    """
    Reader as seen by the realtime core.

    Account management lives elsewhere; the core only needs the display name
    for presence notifications, the role for authorization checks, and the
    playback preferences for tempo scaling.
    """

    id: UserId
    username: str
    role: UserRole = UserRole.READER
    preferences: ReaderPreferences = field(default_factory=ReaderPreferences)

    def __post_init__(self) -> None:
        if not self.username:
            raise ValidationError("Username cannot be empty", field="username")

    def update_preferences(self, **changes: Any) -> dict[str, tuple[Any, Any]]:  # noqa: ANN401
        """
        Apply a partial preferences update.

        Returns:
            The changed fields as ``{name: (old, new)}``; empty if nothing changed.

        Raises:
            ValidationError: If a new value is out of bounds
        """
        updated = self.preferences.with_updates(**changes)
        changed = self.preferences.diff(updated)
        self.preferences = updated
        return changed
