from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class BookId(EntityId):
    """Strongly-typed book identifier."""


@dataclass(frozen=True)
class PresetId(EntityId):
    """Strongly-typed preset identifier."""


@dataclass(frozen=True)
class MoodId(EntityId):
    """Strongly-typed mood reference identifier."""


@dataclass(frozen=True)
class BackgroundId(EntityId):
    """Strongly-typed background identifier."""


@dataclass(frozen=True)
class MoodMapEntryId(EntityId):
    """Strongly-typed mood map breakpoint identifier."""


@dataclass(frozen=True)
class TriggerRuleId(EntityId):
    """Strongly-typed trigger rule identifier."""
