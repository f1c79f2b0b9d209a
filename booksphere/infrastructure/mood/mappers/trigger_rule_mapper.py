"""Mapper for MoodTrigger ORM ↔ TriggerRule domain conversion."""

from booksphere.domain.common.value_objects.ids import MoodId, PresetId, TriggerRuleId
from booksphere.domain.mood.entities.trigger_rule import TriggerRule
from booksphere.domain.mood.value_objects.trigger_condition import TriggerCondition
from booksphere.models import MoodTrigger as MoodTriggerORM


class TriggerRuleMapper:
    """Mapper for MoodTrigger ORM ↔ TriggerRule domain conversion."""

    def to_domain(self, orm_model: MoodTriggerORM) -> TriggerRule:
        return TriggerRule(
            id=TriggerRuleId(orm_model.id),
            preset_id=PresetId(orm_model.preset_id),
            mood_id=MoodId(orm_model.mood_id),
            condition=TriggerCondition.from_json(orm_model.trigger_condition),
            mood_name=orm_model.mood.mood_name if orm_model.mood else None,
            music_track_id=orm_model.music_track_id,
            background_image_url=orm_model.background_image_url,
            transition_duration_ms=orm_model.transition_duration,
            is_active=orm_model.is_active,
            priority=orm_model.priority,
            created_at=orm_model.created_at,
        )
