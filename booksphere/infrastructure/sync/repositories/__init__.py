from .audit_log_repository import AuditLogRepository
from .in_memory_sync_event_store import InMemorySyncEventStore

__all__ = ["AuditLogRepository", "InMemorySyncEventStore"]
