"""Business logic services."""

from draft_counter.services.counter_store import CounterStore
from draft_counter.services.hero_resolver import HeroResolver
from draft_counter.services.room_broadcaster import RoomBroadcaster, create_broadcaster
from draft_counter.services.room_manager import RoomManager
from draft_counter.services.suggestion_engine import suggest_counters
from draft_counter.services.win_estimator import WinEstimator

__all__ = [
    "CounterStore",
    "HeroResolver",
    "RoomBroadcaster",
    "create_broadcaster",
    "RoomManager",
    "suggest_counters",
    "WinEstimator",
]
