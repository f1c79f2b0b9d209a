"""Structured predicate attached to a trigger rule."""

from dataclasses import dataclass, field
from typing import Any

from booksphere.domain.common.exceptions import ValidationError
from booksphere.domain.common.value_object import ValueObject


@dataclass(frozen=True)
class PageRange(ValueObject):
    """Closed range of absolute page numbers, both ends inclusive."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(
                "Page range start must be <= end", field="page_range", value=[self.start, self.end]
            )

    def contains(self, page: int) -> bool:
        return self.start <= page <= self.end


@dataclass(frozen=True)
class ReadingSpeedRange(ValueObject):
    """Words-per-minute window."""

    min: float
    max: float


@dataclass(frozen=True)
class TriggerCondition(ValueObject):
    """
    Predicate over the reading position.

    Only ``page_range`` participates in position matching. The keyword,
    passage, time-of-day and reading-speed predicates are stored and returned
    to clients, which evaluate them locally.
    """

    page_range: PageRange | None = None
    keywords: tuple[str, ...] = field(default_factory=tuple)
    passage_text: str | None = None
    time_of_day: tuple[str, ...] = field(default_factory=tuple)
    reading_speed: ReadingSpeedRange | None = None

    @property
    def is_page_scoped(self) -> bool:
        return self.page_range is not None

    def matches_page(self, page: int) -> bool:
        """A rule without a page range matches every page."""
        if self.page_range is None:
            return True
        return self.page_range.contains(page)

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "TriggerCondition":
        """Build from the stored JSON document."""
        data = data or {}
        page_range = None
        raw_range = data.get("page_range")
        if raw_range is not None:
            if not isinstance(raw_range, list | tuple) or len(raw_range) != 2:
                raise ValidationError(
                    "page_range must be a [start, end] pair", field="page_range", value=raw_range
                )
            page_range = PageRange(start=int(raw_range[0]), end=int(raw_range[1]))

        reading_speed = None
        raw_speed = data.get("reading_speed")
        if raw_speed:
            reading_speed = ReadingSpeedRange(min=raw_speed["min"], max=raw_speed["max"])

        return cls(
            page_range=page_range,
            keywords=tuple(data.get("keywords") or ()),
            passage_text=data.get("passage_text"),
            time_of_day=tuple(data.get("time_of_day") or ()),
            reading_speed=reading_speed,
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize to the stored JSON document, omitting absent predicates."""
        result: dict[str, Any] = {}
        if self.page_range is not None:
            result["page_range"] = [self.page_range.start, self.page_range.end]
        if self.keywords:
            result["keywords"] = list(self.keywords)
        if self.passage_text is not None:
            result["passage_text"] = self.passage_text
        if self.time_of_day:
            result["time_of_day"] = list(self.time_of_day)
        if self.reading_speed is not None:
            result["reading_speed"] = {"min": self.reading_speed.min, "max": self.reading_speed.max}
        return result
