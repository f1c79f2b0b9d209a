"""Application layer: use cases, protocols and in-process realtime services."""
