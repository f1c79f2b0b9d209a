from .delta_sync_reconciler import (
    DeltaSyncReconciler,
    ProcessDeltaResult,
    SyncDelta,
    SyncStats,
    current_millis,
)

__all__ = [
    "DeltaSyncReconciler",
    "ProcessDeltaResult",
    "SyncDelta",
    "SyncStats",
    "current_millis",
]
