"""
Base class for Value Objects.

A value object has no identity of its own: two instances carrying the same
attributes are interchangeable. Subclasses are frozen dataclasses that
validate themselves in ``__post_init__``.

Example:
    @dataclass(frozen=True)
    class PageRange(ValueObject):
        start: int
        end: int
"""


class ValueObject:
    """Marker base for immutable, attribute-compared domain values."""

    def to_primitive(self) -> object:
        """
        Convert to a primitive Python type for serialization.

        Single-attribute values collapse to that attribute; anything else
        becomes a dict of its fields.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
