from .sync_event import SyncEvent, SyncEventType

__all__ = ["SyncEvent", "SyncEventType"]
