"""Live room sync over WebSockets."""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RoomBroadcaster:
    """Pushes the room view to every client connected to the same room.

    One instance is created at application startup when sync is enabled and
    passed to the handlers that need it.
    """

    def __init__(self):
        self.connections: dict[str, set[Any]] = {}

    def connect(self, room: str, websocket: Any) -> None:
        self.connections.setdefault(room, set()).add(websocket)
        logger.info(f"Client joined room {room} ({len(self.connections[room])} connected)")

    def disconnect(self, room: str, websocket: Any) -> None:
        clients = self.connections.get(room)
        if not clients:
            return
        clients.discard(websocket)
        if not clients:
            del self.connections[room]

    def connection_count(self, room: str) -> int:
        return len(self.connections.get(room, ()))

    async def broadcast(self, room: str, view: dict) -> int:
        """Send a room view to all clients in the room. Returns clients reached.

        The view carries the recomputed suggestions and win estimate, so
        clients never need an engine of their own.
        """
        message = {"type": "room", **view}
        delivered = 0
        for websocket in list(self.connections.get(room, ())):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping client from room {room}: {e}")
                self.disconnect(room, websocket)
        return delivered


def create_broadcaster(enabled: bool) -> Optional[RoomBroadcaster]:
    """Build the sync context, or None when room sync is disabled."""
    if not enabled:
        logger.info("Room sync disabled")
        return None
    return RoomBroadcaster()
