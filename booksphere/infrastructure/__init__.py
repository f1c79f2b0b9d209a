"""Infrastructure layer: persistence, transport, HTTP and websocket adapters."""
