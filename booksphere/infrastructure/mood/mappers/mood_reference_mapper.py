"""Mapper for MoodReference and Background ORM ↔ Domain conversion."""

from booksphere.domain.common.value_objects.ids import BackgroundId, MoodId
from booksphere.domain.mood.entities.background import Background
from booksphere.domain.mood.entities.mood_reference import MoodReference
from booksphere.models import Background as BackgroundORM
from booksphere.models import MoodReference as MoodReferenceORM


class MoodReferenceMapper:
    """Mapper for MoodReference and Background ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: MoodReferenceORM) -> MoodReference:
        return MoodReference(
            id=MoodId(orm_model.id),
            name=orm_model.mood_name,
            tempo_electronic=orm_model.tempo_electronic,
            tempo_classical=orm_model.tempo_classical,
            tempo_lofi=orm_model.tempo_lofi,
            tempo_custom=orm_model.tempo_custom or 0,
        )

    def background_to_domain(self, orm_model: BackgroundORM) -> Background:
        return Background(
            id=BackgroundId(orm_model.id),
            mood_id=MoodId(orm_model.mood_id),
            path=orm_model.background_path,
        )
