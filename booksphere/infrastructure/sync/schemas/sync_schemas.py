"""Pydantic schemas for the delta sync API."""

from typing import Any

from pydantic import Field

from booksphere.infrastructure.common.schemas import CamelModel


class SyncEventResponse(CamelModel):
    id: str
    type: str
    timestamp: float
    user_id: int
    book_id: int | None = None
    preset_id: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class SyncDeltaResponse(CamelModel):
    events: list[SyncEventResponse]
    server_timestamp: int = Field(..., description="Watermark for the next delta request")


class SyncDeltaRequest(CamelModel):
    """
    Batch of client events.

    Entries are kept as raw objects so that one malformed entry is skipped
    instead of rejecting the whole batch.
    """

    events: list[dict[str, Any]] = Field(..., description="Events with id, type and timestamp")


class SyncDeltaProcessedResponse(CamelModel):
    processed: int
    skipped: int
    errors: list[str] = Field(default_factory=list)
    server_timestamp: int


class SyncStatsResponse(CamelModel):
    count: int
    oldest: float | None = None
    newest: float | None = None
