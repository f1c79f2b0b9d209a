"""Sync infrastructure schemas."""

from booksphere.infrastructure.sync.schemas.sync_schemas import (
    SyncDeltaProcessedResponse,
    SyncDeltaRequest,
    SyncDeltaResponse,
    SyncEventResponse,
    SyncStatsResponse,
)

__all__ = [
    "SyncDeltaProcessedResponse",
    "SyncDeltaRequest",
    "SyncDeltaResponse",
    "SyncEventResponse",
    "SyncStatsResponse",
]
