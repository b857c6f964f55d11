"""WebSocket handler for live draft room sync."""

import json
import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect

from draft_counter.api.routes.draft import build_room_view
from draft_counter.models.draft import RoomState
from draft_counter.services.counter_store import CounterStore
from draft_counter.services.room_broadcaster import RoomBroadcaster
from draft_counter.services.room_manager import RoomManager

logger = logging.getLogger(__name__)

SYNC_DISABLED_CODE = 4003


def _apply_message(
    msg: dict, room: str, rooms: RoomManager, store: CounterStore
) -> Optional[RoomState]:
    """Apply one client command. Returns the new state, or None if unchanged.

    Raises:
        ValueError: If the message is malformed
    """
    msg_type = msg.get("type")

    if msg_type in ("pick", "ban"):
        kind = "picks" if msg_type == "pick" else "bans"
        return rooms.set_slot(room, kind, msg.get("team"), int(msg.get("index", -1)), str(msg.get("value", "")))

    if msg_type in ("finalize_pick", "finalize_ban"):
        kind = "picks" if msg_type == "finalize_pick" else "bans"
        state, changed = rooms.finalize_slot(
            room, kind, msg.get("team"), int(msg.get("index", -1)), store.resolve
        )
        return state if changed else None

    if msg_type == "set_k":
        return rooms.set_max_picks(room, int(msg.get("k", 5)))

    if msg_type == "reset":
        return rooms.reset(room)

    raise ValueError(f"Unknown message type: {msg_type}")


async def room_websocket(
    websocket: WebSocket,
    room: str,
    rooms: RoomManager,
    store: CounterStore,
    broadcaster: Optional[RoomBroadcaster],
):
    """Handle a WebSocket connection for one draft room.

    Sends the current room view on connect, then applies client commands and
    broadcasts the recomputed view to everyone in the room, sender included.
    """
    if broadcaster is None:
        await websocket.close(code=SYNC_DISABLED_CODE, reason="Room sync disabled")
        return

    await websocket.accept()
    broadcaster.connect(room, websocket)

    try:
        await websocket.send_json({"type": "room", **build_room_view(store, rooms.get(room))})

        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
                state = _apply_message(msg, room, rooms, store)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received: {data}")
                await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                continue
            except (ValueError, TypeError, AttributeError) as e:
                await websocket.send_json({"type": "error", "message": str(e)})
                continue

            # The sender is in the room too and gets the view with everyone else
            if state is not None:
                await broadcaster.broadcast(room, build_room_view(store, state))

    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(room, websocket)
        if broadcaster.connection_count(room) == 0:
            rooms.discard_if_empty(room)
