import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from starlette import status

from booksphere.application.sync.services.delta_sync_reconciler import DeltaSyncReconciler
from booksphere.config import get_settings
from booksphere.core import container
from booksphere.domain.identity.entities.user import User
from booksphere.domain.sync.entities.sync_event import SyncEvent
from booksphere.infrastructure.common.rate_limit import limiter
from booksphere.infrastructure.common.schemas import SuccessResponse
from booksphere.infrastructure.identity.dependencies import get_current_user
from booksphere.infrastructure.sync.schemas import (
    SyncDeltaProcessedResponse,
    SyncDeltaRequest,
    SyncDeltaResponse,
    SyncEventResponse,
    SyncStatsResponse,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/sync", tags=["sync"])


def get_delta_sync_reconciler() -> DeltaSyncReconciler:
    """The process-wide reconciler, shared with the websocket handlers."""
    return container.delta_sync_reconciler()


def _to_response(event: SyncEvent) -> SyncEventResponse:
    return SyncEventResponse(
        id=event.id,
        type=event.type,
        timestamp=event.timestamp,
        user_id=event.user_id.value,
        book_id=event.book_id.value if event.book_id else None,
        preset_id=event.preset_id.value if event.preset_id else None,
        data=event.data,
    )


@router.get("/delta", response_model=SyncDeltaResponse, status_code=status.HTTP_200_OK)
async def get_sync_delta(
    current_user: Annotated[User, Depends(get_current_user)],
    reconciler: Annotated[DeltaSyncReconciler, Depends(get_delta_sync_reconciler)],
    last_sync_timestamp: float = Query(
        0, alias="lastSyncTimestamp", ge=0, description="Client watermark in milliseconds"
    ),
) -> SyncDeltaResponse:
    """
    Get the caller's sync events newer than ``lastSyncTimestamp``.

    Args:
        last_sync_timestamp: Watermark from the previous response (0 for everything)

    Returns:
        Events in arrival order and the new server watermark
    """
    delta = await reconciler.delta(current_user.id.value, last_sync_timestamp)
    return SyncDeltaResponse(
        events=[_to_response(event) for event in delta.events],
        server_timestamp=delta.server_timestamp,
    )


@router.post(
    "/delta", response_model=SyncDeltaProcessedResponse, status_code=status.HTTP_200_OK
)
@limiter.limit(settings.SYNC_BATCH_RATE_LIMIT)  # type: ignore[misc]
async def process_sync_delta(
    request: Request,
    payload: SyncDeltaRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    reconciler: Annotated[DeltaSyncReconciler, Depends(get_delta_sync_reconciler)],
) -> SyncDeltaProcessedResponse:
    """
    Submit a batch of offline events.

    Invalid entries are skipped and reported; valid ones are buffered and
    their side effects applied.
    """
    result = await reconciler.process_delta(current_user.id.value, payload.events)
    if result.skipped:
        logger.warning(
            f"Skipped {result.skipped} of {len(payload.events)} sync events "
            f"for user {current_user.id.value}"
        )
    return SyncDeltaProcessedResponse(
        processed=result.processed,
        skipped=result.skipped,
        errors=result.errors,
        server_timestamp=reconciler.now(),
    )


@router.get("/stats", response_model=SyncStatsResponse, status_code=status.HTTP_200_OK)
async def get_sync_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    reconciler: Annotated[DeltaSyncReconciler, Depends(get_delta_sync_reconciler)],
) -> SyncStatsResponse:
    stats = await reconciler.stats(current_user.id.value)
    return SyncStatsResponse(count=stats.count, oldest=stats.oldest, newest=stats.newest)


@router.delete("", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
async def clear_sync_data(
    current_user: Annotated[User, Depends(get_current_user)],
    reconciler: Annotated[DeltaSyncReconciler, Depends(get_delta_sync_reconciler)],
) -> SuccessResponse:
    """Drop every buffered sync event of the caller."""
    await reconciler.clear(current_user.id.value)
    return SuccessResponse(success=True, message="Sync data cleared successfully")
