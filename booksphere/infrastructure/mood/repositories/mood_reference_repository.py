"""Repository for mood reference data and mood backgrounds."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from booksphere.domain.common.value_objects.ids import BackgroundId, MoodId
from booksphere.domain.mood.entities.background import Background
from booksphere.domain.mood.entities.mood_reference import MoodReference
from booksphere.infrastructure.mood.mappers.mood_reference_mapper import MoodReferenceMapper
from booksphere.models import Background as BackgroundORM
from booksphere.models import MoodReference as MoodReferenceORM


class MoodReferenceRepository:
    """Repository for mood reference data and mood backgrounds."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = MoodReferenceMapper()

    def find_by_id(self, mood_id: MoodId) -> MoodReference | None:
        stmt = select(MoodReferenceORM).where(MoodReferenceORM.id == mood_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self) -> list[MoodReference]:
        stmt = select(MoodReferenceORM).order_by(MoodReferenceORM.mood_name.asc())
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm_model) for orm_model in orm_models]

    def find_background(self, background_id: BackgroundId) -> Background | None:
        stmt = select(BackgroundORM).where(BackgroundORM.id == background_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.background_to_domain(orm_model) if orm_model else None
