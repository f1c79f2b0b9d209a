"""Common response wrapper schemas for API responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Client-facing schema: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(BaseModel):
    """Generic success response wrapper."""

    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    active_sessions: int
