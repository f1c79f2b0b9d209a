"""Repository for a preset's mood map breakpoints."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from booksphere.domain.common.value_objects.ids import PresetId
from booksphere.domain.mood.entities.mood_map_entry import MoodMapEntry
from booksphere.infrastructure.mood.mappers.mood_map_entry_mapper import MoodMapEntryMapper
from booksphere.models import MoodMapEntry as MoodMapEntryORM


class MoodMapRepository:
    """Repository for a preset's mood map breakpoints."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = MoodMapEntryMapper()

    def find_by_preset(self, preset_id: PresetId) -> list[MoodMapEntry]:
        stmt = (
            select(MoodMapEntryORM)
            .where(MoodMapEntryORM.preset_id == preset_id.value)
            .order_by(
                MoodMapEntryORM.chapter.asc(),
                MoodMapEntryORM.page_fraction.asc(),
                MoodMapEntryORM.id.asc(),
            )
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm_model) for orm_model in orm_models]
