"""Sync module domain layer."""

from .entities import SyncEvent, SyncEventType

__all__ = ["SyncEvent", "SyncEventType"]
