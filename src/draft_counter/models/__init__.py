"""Data models for the draft counter assistant."""

from draft_counter.models.draft import RoomState, clamp_max_picks
from draft_counter.models.matchup import CounterDataset, MatchupRecord
from draft_counter.models.recommendations import (
    AssignedCounter,
    MatchupPair,
    PairingResult,
    SuggestionResult,
)

__all__ = [
    "RoomState",
    "clamp_max_picks",
    "CounterDataset",
    "MatchupRecord",
    "AssignedCounter",
    "MatchupPair",
    "PairingResult",
    "SuggestionResult",
]
