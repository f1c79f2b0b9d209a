"""Sync application module: delta reconciliation over a swappable event store."""
