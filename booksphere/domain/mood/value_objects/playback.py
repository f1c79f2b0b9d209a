"""Playback-related enums: music genre and transition type."""

from enum import StrEnum


class TransitionType(StrEnum):
    FADE = "fade"
    CROSSFADE = "crossfade"
    JUMP = "jump"

    @classmethod
    def parse(cls, value: str | None) -> "TransitionType":
        """Unset or unknown values fall back to a fade."""
        if not value:
            return cls.FADE
        try:
            return cls(value.lower())
        except ValueError:
            return cls.FADE


class MusicGenre(StrEnum):
    ELECTRONIC = "electronic"
    CLASSICAL = "classical"
    LOFI = "lofi"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str | None) -> "MusicGenre":
        """
        Normalize a client-supplied genre.

        Accepts the ``classic`` and ``lo-fi`` spellings. Anything unrecognized
        is treated as custom.
        """
        normalized = (value or "").strip().lower()
        aliases = {
            "classic": cls.CLASSICAL,
            "lo-fi": cls.LOFI,
            "lo_fi": cls.LOFI,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            return cls.CUSTOM
