"""Mapper for MoodMapEntry ORM ↔ Domain conversion."""

from booksphere.domain.common.value_objects.ids import (
    BackgroundId,
    MoodId,
    MoodMapEntryId,
    PresetId,
)
from booksphere.domain.mood.entities.mood_map_entry import MoodMapEntry
from booksphere.domain.mood.value_objects.chapter_position import ChapterPosition
from booksphere.domain.mood.value_objects.playback import TransitionType
from booksphere.models import MoodMapEntry as MoodMapEntryORM


class MoodMapEntryMapper:
    """Mapper for MoodMapEntry ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: MoodMapEntryORM) -> MoodMapEntry:
        return MoodMapEntry(
            id=MoodMapEntryId(orm_model.id),
            preset_id=PresetId(orm_model.preset_id),
            position=ChapterPosition(
                chapter=orm_model.chapter, page_fraction=orm_model.page_fraction
            ),
            mood_id=MoodId(orm_model.mood_id) if orm_model.mood_id is not None else None,
            background_id=(
                BackgroundId(orm_model.background_id)
                if orm_model.background_id is not None
                else None
            ),
            transition_type=TransitionType.parse(orm_model.transition_type),
        )
