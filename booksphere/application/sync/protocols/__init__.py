from .audit_trail import AuditAction, AuditTrailProtocol
from .sync_event_store import SyncEventStoreProtocol

__all__ = ["AuditAction", "AuditTrailProtocol", "SyncEventStoreProtocol"]
