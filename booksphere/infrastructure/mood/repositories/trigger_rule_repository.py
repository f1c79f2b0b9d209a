"""Repository for TriggerRule domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from booksphere.domain.common.value_objects.ids import PresetId
from booksphere.domain.mood.entities.trigger_rule import TriggerRule
from booksphere.infrastructure.mood.mappers.trigger_rule_mapper import TriggerRuleMapper
from booksphere.models import MoodTrigger as MoodTriggerORM


class TriggerRuleRepository:
    """Repository for TriggerRule domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TriggerRuleMapper()

    def find_by_preset(self, preset_id: PresetId) -> list[TriggerRule]:
        """
        Get every trigger rule of a preset, active or not.

        Args:
            preset_id: The preset ID

        Returns:
            Rules ordered by priority, then creation order. An unknown preset
            yields an empty list.
        """
        stmt = (
            select(MoodTriggerORM)
            .options(joinedload(MoodTriggerORM.mood))
            .where(MoodTriggerORM.preset_id == preset_id.value)
            .order_by(
                MoodTriggerORM.priority.asc(),
                MoodTriggerORM.created_at.asc(),
                MoodTriggerORM.id.asc(),
            )
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm_model) for orm_model in orm_models]
