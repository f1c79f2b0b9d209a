"""MoodReference entity: a named mood with per-genre base tempos."""

from dataclasses import dataclass

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_objects.ids import MoodId
from booksphere.domain.mood.value_objects.playback import MusicGenre

MIN_TEMPO = 30
MAX_TEMPO = 200


@dataclass(eq=False)
class MoodReference(Entity[MoodId]):
    """
    Immutable reference data authored by creators and admins.

    Business Rules:
    - Every genre tempo lies within [MIN_TEMPO, MAX_TEMPO] beats per minute
    - ``tempo_custom`` may be 0, meaning "no custom tempo"
    """

    id: MoodId
    name: str
    tempo_electronic: int
    tempo_classical: int
    tempo_lofi: int
    tempo_custom: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("Mood name cannot be empty", field="name")
        for field_name in ("tempo_electronic", "tempo_classical", "tempo_lofi"):
            self._validate_tempo(field_name, getattr(self, field_name))
        if self.tempo_custom:
            self._validate_tempo("tempo_custom", self.tempo_custom)

    @staticmethod
    def _validate_tempo(field_name: str, tempo: int) -> None:
        if not MIN_TEMPO <= tempo <= MAX_TEMPO:
            raise ValidationError(
                f"Tempo must be between {MIN_TEMPO} and {MAX_TEMPO} bpm",
                field=field_name,
                value=tempo,
            )

    def base_tempo_for(self, genre: MusicGenre) -> int:
        """
        Pick the base tempo for a genre.

        Electronic, classical and lo-fi read their own field. Any other genre
        uses the custom tempo when set, else the electronic tempo.
        """
        if genre == MusicGenre.ELECTRONIC:
            return self.tempo_electronic
        if genre == MusicGenre.CLASSICAL:
            return self.tempo_classical
        if genre == MusicGenre.LOFI:
            return self.tempo_lofi
        return self.tempo_custom or self.tempo_electronic
