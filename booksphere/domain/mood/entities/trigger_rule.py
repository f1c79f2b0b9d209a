"""TriggerRule entity."""

from dataclasses import dataclass, field
from datetime import datetime

from booksphere.domain.common.entity import Entity
from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_objects.ids import MoodId, PresetId, TriggerRuleId
from booksphere.domain.mood.value_objects.trigger_condition import TriggerCondition

MIN_TRANSITION_DURATION_MS = 100
MAX_TRANSITION_DURATION_MS = 10000
DEFAULT_TRANSITION_DURATION_MS = 3000
MIN_PRIORITY = 1
MAX_PRIORITY = 100


@dataclass(eq=False)
class TriggerRule(Entity[TriggerRuleId]):
    """
    Rule associating a trigger condition with a mood and media.

    Business Rules:
    - Belongs to exactly one preset
    - Lower ``priority`` value means higher precedence
    - Transition duration within [100, 10000] ms
    """

    id: TriggerRuleId
    preset_id: PresetId
    mood_id: MoodId
    condition: TriggerCondition = field(default_factory=TriggerCondition)
    mood_name: str | None = None
    music_track_id: int | None = None
    background_image_url: str | None = None
    transition_duration_ms: int = DEFAULT_TRANSITION_DURATION_MS
    is_active: bool = True
    priority: int = MIN_PRIORITY
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        duration = self.transition_duration_ms
        if not MIN_TRANSITION_DURATION_MS <= duration <= MAX_TRANSITION_DURATION_MS:
            raise ValidationError(
                f"Transition duration must be between {MIN_TRANSITION_DURATION_MS} and "
                f"{MAX_TRANSITION_DURATION_MS} ms",
                field="transition_duration_ms",
                value=self.transition_duration_ms,
            )
        if not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            raise ValidationError(
                f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}",
                field="priority",
                value=self.priority,
            )

    def matches_page(self, page: int) -> bool:
        return self.is_active and self.condition.matches_page(page)
