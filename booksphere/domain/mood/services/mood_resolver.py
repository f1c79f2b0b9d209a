"""Domain service mapping a reading position to a mood and tempo."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from booksphere.domain.common.value_objects.ids import MoodId, MoodMapEntryId
from booksphere.domain.mood.entities.background import Background
from booksphere.domain.mood.entities.mood_map_entry import MoodMapEntry
from booksphere.domain.mood.entities.mood_reference import MAX_TEMPO, MIN_TEMPO, MoodReference
from booksphere.domain.mood.value_objects.chapter_position import ChapterPosition
from booksphere.domain.mood.value_objects.playback import MusicGenre, TransitionType

MIN_SENSITIVITY = 0.1
MAX_SENSITIVITY = 2.0


def clamp_sensitivity(sensitivity: float) -> float:
    return max(MIN_SENSITIVITY, min(MAX_SENSITIVITY, sensitivity))


@dataclass(frozen=True)
class MoodTriggerOutcome:
    """Result of resolving a position: what to play and how to transition."""

    entry_id: MoodMapEntryId
    mood_id: MoodId
    mood_name: str
    base_tempo: int
    tempo: int
    transition_type: TransitionType
    background_path: str | None = None


class MoodResolver:
    """
    Resolves the active mood for a position within one preset's mood map.

    Breakpoint selection is "latest not after": among entries at or before
    the requested (chapter, page_fraction), the greatest one wins. A reader
    between two breakpoints inherits the most recently crossed one.

    The resolver is side-effect free; auditing the outcome is the caller's job.
    """

    def __init__(self, clamp_output_tempo: bool = False) -> None:
        self.clamp_output_tempo = clamp_output_tempo

    def select_entry(
        self, entries: Iterable[MoodMapEntry], position: ChapterPosition
    ) -> MoodMapEntry | None:
        """Nearest preceding breakpoint, or None if ``position`` precedes them all."""
        candidates = [entry for entry in entries if entry.position <= position]
        if not candidates:
            return None
        return max(candidates, key=lambda entry: (entry.position, entry.id.value))

    def adjusted_tempo(self, base_tempo: int, sensitivity: float) -> int:
        """
        Scale ``base_tempo`` by the clamped sensitivity.

        The product is not re-clamped to the nominal tempo bounds unless the
        resolver was built with ``clamp_output_tempo``.
        """
        # Round half up
        tempo = math.floor(base_tempo * clamp_sensitivity(sensitivity) + 0.5)
        if self.clamp_output_tempo:
            tempo = max(MIN_TEMPO, min(MAX_TEMPO, tempo))
        return tempo

    def build_outcome(
        self,
        entry: MoodMapEntry,
        mood: MoodReference,
        genre: MusicGenre,
        sensitivity: float,
        background: Background | None = None,
    ) -> MoodTriggerOutcome:
        base_tempo = mood.base_tempo_for(genre)
        return MoodTriggerOutcome(
            entry_id=entry.id,
            mood_id=mood.id,
            mood_name=mood.name,
            base_tempo=base_tempo,
            tempo=self.adjusted_tempo(base_tempo, sensitivity),
            transition_type=entry.transition_type,
            background_path=background.path if background else None,
        )
