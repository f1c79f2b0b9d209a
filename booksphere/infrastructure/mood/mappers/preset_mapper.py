"""Mapper for Preset ORM ↔ Domain conversion."""

from booksphere.domain.common.value_objects.ids import BookId, PresetId, UserId
from booksphere.domain.mood.entities.preset import Preset
from booksphere.models import Preset as PresetORM


class PresetMapper:
    """Mapper for Preset ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: PresetORM) -> Preset:
        return Preset(
            id=PresetId(orm_model.id),
            creator_id=UserId(orm_model.creator_id),
            book_id=BookId(orm_model.book_id),
            name=orm_model.name,
            description=orm_model.description,
            is_default=orm_model.is_default,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )
