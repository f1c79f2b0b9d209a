"""ChapterPosition value object for breakpoint ordering.

A reading position addressed as (chapter, page_fraction). Ordering is
lexicographic, so comparing two positions answers "has the reader crossed
this breakpoint yet?" directly.
"""

from dataclasses import dataclass

from booksphere.domain.common.exceptions import ValidationError


@dataclass(frozen=True, order=True)
class ChapterPosition:
    """A location in a book, comparable by reading order."""

    chapter: int
    page_fraction: float = 0.0

    def __post_init__(self) -> None:
        if self.chapter < 0:
            raise ValidationError("Chapter cannot be negative", field="chapter", value=self.chapter)

    def to_json(self) -> list[float]:
        """Serialize to JSON-compatible list [chapter, page_fraction]."""
        return [self.chapter, self.page_fraction]
