"""WebSocket handlers."""
