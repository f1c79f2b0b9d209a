"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity / EntityId: Objects with identity and typed identifiers
- DomainError hierarchy
"""

from .entity import Entity, EntityId
from .exceptions import (
    DomainError,
    InvalidStateTransitionError,
    ValidationError,
)
from .value_object import ValueObject

__all__ = [
    "DomainError",
    "Entity",
    "EntityId",
    "InvalidStateTransitionError",
    "ValidationError",
    "ValueObject",
]
