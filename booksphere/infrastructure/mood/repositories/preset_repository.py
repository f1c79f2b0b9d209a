"""Repository for Preset domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from booksphere.domain.common.value_objects.ids import BookId
from booksphere.domain.mood.entities.preset import Preset
from booksphere.infrastructure.mood.mappers.preset_mapper import PresetMapper
from booksphere.models import Preset as PresetORM


class PresetRepository:
    """Repository for Preset domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PresetMapper()

    def find_default_for_book(self, book_id: BookId) -> Preset | None:
        """
        Get the book's default preset.

        Args:
            book_id: The book ID

        Returns:
            The default preset, or None if the book has none
        """
        stmt = select(PresetORM).where(
            PresetORM.book_id == book_id.value,
            PresetORM.is_default.is_(True),
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None
