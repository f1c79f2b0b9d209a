from .chapter_position import ChapterPosition
from .playback import MusicGenre, TransitionType
from .trigger_condition import PageRange, ReadingSpeedRange, TriggerCondition

__all__ = [
    "ChapterPosition",
    "MusicGenre",
    "PageRange",
    "ReadingSpeedRange",
    "TransitionType",
    "TriggerCondition",
]
