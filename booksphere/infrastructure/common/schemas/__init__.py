"""Common infrastructure schemas."""

from booksphere.infrastructure.common.schemas.response_wrappers import (
    CamelModel,
    HealthResponse,
    SuccessResponse,
)

__all__ = [
    "CamelModel",
    "HealthResponse",
    "SuccessResponse",
]
