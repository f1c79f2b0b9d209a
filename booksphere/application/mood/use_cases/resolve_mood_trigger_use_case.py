"""Use case resolving the mood trigger for a reading position."""

import structlog

from booksphere.application.mood.protocols.mood_map_repository import MoodMapRepositoryProtocol
from booksphere.application.mood.protocols.mood_reference_repository import (
    MoodReferenceRepositoryProtocol,
)
from booksphere.domain.common.value_objects.ids import PresetId
from booksphere.domain.mood.services.mood_resolver import MoodResolver, MoodTriggerOutcome
from booksphere.domain.mood.value_objects.chapter_position import ChapterPosition
from booksphere.domain.mood.value_objects.playback import MusicGenre

logger = structlog.get_logger(__name__)


class ResolveMoodTriggerUseCase:
    """Looks up a preset's mood map and turns the active breakpoint into an outcome."""

    def __init__(
        self,
        mood_map_repository: MoodMapRepositoryProtocol,
        mood_reference_repository: MoodReferenceRepositoryProtocol,
        mood_resolver: MoodResolver,
    ) -> None:
        self.mood_map_repository = mood_map_repository
        self.mood_reference_repository = mood_reference_repository
        self.mood_resolver = mood_resolver

    def resolve(
        self,
        preset_id: int,
        chapter: int,
        page_fraction: float,
        genre: str,
        sensitivity: float,
    ) -> MoodTriggerOutcome | None:
        """
        Resolve the mood in effect at (chapter, page_fraction).

        Args:
            preset_id: Preset whose mood map is consulted
            chapter: Zero-based chapter index
            page_fraction: Position within the chapter
            genre: Music genre selecting the base tempo
            sensitivity: Reader sensitivity, clamped to [0.1, 2.0]

        Returns:
            The outcome, or None when no breakpoint precedes the position, the
            breakpoint carries no mood, or the referenced mood is missing.
        """
        position = ChapterPosition(chapter=chapter, page_fraction=page_fraction)
        entries = self.mood_map_repository.find_by_preset(PresetId(preset_id))
        entry = self.mood_resolver.select_entry(entries, position)

        if entry is None or entry.mood_id is None:
            return None

        mood = self.mood_reference_repository.find_by_id(entry.mood_id)
        if mood is None:
            logger.warning(
                "mood_reference_missing",
                preset_id=preset_id,
                entry_id=entry.id.value,
                mood_id=entry.mood_id.value,
            )
            return None

        background = None
        if entry.background_id is not None:
            background = self.mood_reference_repository.find_background(entry.background_id)

        outcome = self.mood_resolver.build_outcome(
            entry=entry,
            mood=mood,
            genre=MusicGenre.parse(genre),
            sensitivity=sensitivity,
            background=background,
        )

        logger.debug(
            "mood_trigger_calculated",
            preset_id=preset_id,
            chapter=chapter,
            page_fraction=page_fraction,
            mood_name=outcome.mood_name,
            base_tempo=outcome.base_tempo,
            adjusted_tempo=outcome.tempo,
            sensitivity=sensitivity,
        )
        return outcome
