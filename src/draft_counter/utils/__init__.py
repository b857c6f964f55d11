"""Utility modules for draft_counter."""

from draft_counter.utils.lane_normalizer import (
    CANONICAL_LANES,
    LANE_ALIASES,
    LANE_ORDER,
    normalize_lane,
    is_canonical_lane,
    sort_by_lane,
)

__all__ = [
    "CANONICAL_LANES",
    "LANE_ALIASES",
    "LANE_ORDER",
    "normalize_lane",
    "is_canonical_lane",
    "sort_by_lane",
]
