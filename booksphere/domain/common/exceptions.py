"""
Domain layer exceptions.

Raised when a business rule or invariant is broken. The infrastructure layer
translates them into HTTP responses or websocket error messages.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """Raised when a value violates a domain constraint (bounds, enums, shapes)."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidStateTransitionError(DomainError):
    """Raised when a connection is asked to move between incompatible states."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot transition from {current} to {target}",
            {"current": current, "target": target},
        )
        self.current = current
        self.target = target
