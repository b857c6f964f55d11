"""Draft room state management."""

import logging
import threading
from collections import OrderedDict
from typing import Callable, Literal

from draft_counter.models.draft import ROSTER_SIZE, RoomState, Side, clamp_max_picks

logger = logging.getLogger(__name__)

SlotKind = Literal["picks", "bans"]

SIDES = ("A", "B")
SLOT_KINDS = ("picks", "bans")


def check_slot(kind: str, side: str, index: int) -> None:
    """Validate a slot address.

    Raises:
        ValueError: If side, kind or index is out of range
    """
    if side not in SIDES:
        raise ValueError(f"Unknown side: {side}")
    if kind not in SLOT_KINDS:
        raise ValueError(f"Unknown slot kind: {kind}")
    if not 0 <= index < ROSTER_SIZE:
        raise ValueError(f"Slot index out of range: {index}")


class RoomManager:
    """In-memory store of draft rooms.

    Rooms are created on first write or connection and kept in least
    recently used order. Past max_rooms the oldest empty room is evicted
    first, then the oldest room. State is not persisted; a restart starts
    every room empty.
    """

    def __init__(self, default_max_picks: int = 5, max_rooms: int = 256):
        self.default_max_picks = clamp_max_picks(default_max_picks)
        self.max_rooms = max(1, max_rooms)
        self.rooms: OrderedDict[str, RoomState] = OrderedDict()
        self._lock = threading.Lock()

    def _new_room(self, room: str) -> RoomState:
        return RoomState(room=room, k=self.default_max_picks)

    def _evict(self, keep: str) -> None:
        while len(self.rooms) > self.max_rooms:
            others = [name for name in self.rooms if name != keep]
            victim = next((name for name in others if self.rooms[name].is_empty), others[0])
            del self.rooms[victim]
            logger.info(f"Evicted room {victim}")

    def get(self, room: str) -> RoomState:
        """Get a room, creating it if needed."""
        with self._lock:
            state = self.rooms.get(room)
            if state is None:
                state = self._new_room(room)
                self.rooms[room] = state
                logger.info(f"Created room {room}")
                self._evict(keep=room)
            else:
                self.rooms.move_to_end(room)
            return state

    def peek(self, room: str) -> RoomState:
        """Get a room for reading. Unknown rooms are not stored."""
        with self._lock:
            return self.rooms.get(room) or self._new_room(room)

    def discard_if_empty(self, room: str) -> bool:
        """Drop a room with no picks or bans. Returns True if it was dropped."""
        with self._lock:
            state = self.rooms.get(room)
            if state is None or not state.is_empty:
                return False
            del self.rooms[room]
        logger.info(f"Discarded empty room {room}")
        return True

    def _slots(self, state: RoomState, kind: SlotKind, side: Side) -> list[str]:
        return state.picks(side) if kind == "picks" else state.bans(side)

    def set_slot(self, room: str, kind: SlotKind, side: Side, index: int, value: str) -> RoomState:
        """Write raw text into a pick or ban slot.

        Raises:
            ValueError: If side, kind or index is out of range
        """
        check_slot(kind, side, index)
        state = self.get(room)
        with self._lock:
            self._slots(state, kind, side)[index] = value
        return state

    def finalize_slot(
        self,
        room: str,
        kind: SlotKind,
        side: Side,
        index: int,
        resolve: Callable[[str], str],
    ) -> tuple[RoomState, bool]:
        """Resolve the text in a slot to a canonical hero name.

        Returns:
            (state, changed) - changed is False when resolution left the
            slot text as it was.
        """
        check_slot(kind, side, index)
        state = self.get(room)
        with self._lock:
            slots = self._slots(state, kind, side)
            current = slots[index]
            resolved = resolve(current or "")
            if resolved == current:
                return state, False
            slots[index] = resolved
        return state, True

    def set_max_picks(self, room: str, k: int) -> RoomState:
        state = self.get(room)
        with self._lock:
            state.k = clamp_max_picks(k)
        return state

    def reset(self, room: str) -> RoomState:
        """Clear every roster in the room."""
        with self._lock:
            state = self._new_room(room)
            self.rooms[room] = state
            self.rooms.move_to_end(room)
            self._evict(keep=room)
        return state

    def list_rooms(self) -> list[dict]:
        """Summarize stored rooms, most recently used last."""
        with self._lock:
            return [
                {
                    "room": s.room,
                    "k": s.k,
                    "picks_a": sum(1 for p in s.team_a if p),
                    "picks_b": sum(1 for p in s.team_b if p),
                }
                for s in self.rooms.values()
            ]
