from dataclasses import dataclass

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.value_objects.ids import (
    BackgroundId,
    MoodId,
    MoodMapEntryId,
    PresetId,
)
from booksphere.domain.mood.value_objects.chapter_position import ChapterPosition
from booksphere.domain.mood.value_objects.playback import TransitionType


@dataclass(eq=False)
class MoodMapEntry(Entity[MoodMapEntryId]):
    """
    Breakpoint in a preset's mood map.

    Once a reader passes ``position`` the entry's mood stays active until the
    next breakpoint. An entry without a mood marks a stretch with no mood.
    """

    id: MoodMapEntryId
    preset_id: PresetId
    position: ChapterPosition
    mood_id: MoodId | None = None
    background_id: BackgroundId | None = None
    transition_type: TransitionType = TransitionType.FADE
