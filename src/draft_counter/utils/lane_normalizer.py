"""Centralized lane normalization utility.

Every lane label read from a lane table goes through this module. The
canonical labels are: Gold, EXP, Mid, Jungle, Roam.
"""

from typing import Optional

# Canonical lanes - the labels shown to users and used for lane constraints
CANONICAL_LANES = frozenset({"Gold", "EXP", "Mid", "Jungle", "Roam"})

# Mapping from known lane/role spellings (lowercase) to canonical labels
LANE_ALIASES: dict[str, str] = {
    # Gold lane
    "gold": "Gold",
    "gold lane": "Gold",
    "goldlane": "Gold",
    "gold laner": "Gold",
    "marksman": "Gold",
    "mm": "Gold",
    "adc": "Gold",

    # EXP lane
    "exp": "EXP",
    "exp lane": "EXP",
    "explane": "EXP",
    "exp laner": "EXP",
    "explaner": "EXP",
    "offlane": "EXP",
    "fighter": "EXP",

    # Mid lane
    "mid": "Mid",
    "mid lane": "Mid",
    "midlane": "Mid",
    "mid laner": "Mid",
    "midlaner": "Mid",
    "middle": "Mid",
    "mage": "Mid",

    # Jungle
    "jungle": "Jungle",
    "jungler": "Jungle",
    "jg": "Jungle",
    "jung": "Jungle",
    "assassin": "Jungle",

    # Roam
    "roam": "Roam",
    "roamer": "Roam",
    "support": "Roam",
    "sup": "Roam",
    "tank": "Roam",
}

# Lane ordering for consistent display/sorting
LANE_ORDER = ["Gold", "EXP", "Mid", "Jungle", "Roam"]


def normalize_lane(lane: Optional[str]) -> Optional[str]:
    """Normalize a raw lane label.

    Known spellings map to a canonical lane. Anything else passes through
    title-cased, so a lane map may hold labels outside the canonical five.

    Examples:
        >>> normalize_lane("gold lane")
        'Gold'
        >>> normalize_lane("EXP")
        'EXP'
        >>> normalize_lane("side lane")
        'Side Lane'
        >>> normalize_lane("  ")
        None
    """
    if lane is None:
        return None

    cleaned = " ".join(lane.strip().split())
    if not cleaned:
        return None

    canonical = LANE_ALIASES.get(cleaned.lower())
    if canonical:
        return canonical

    return cleaned.title()


def is_canonical_lane(lane: Optional[str]) -> bool:
    """Check if a label is one of the five canonical lanes."""
    return lane in CANONICAL_LANES


def sort_by_lane(heroes: list[str], lanes: dict[str, str]) -> list[str]:
    """Sort hero names by lane in standard order, unknown lanes last.

    Args:
        heroes: Hero names in any order
        lanes: Lane map keyed by lowercase hero name
    """
    def lane_sort_key(hero: str) -> int:
        lane = lanes.get(hero.lower())
        try:
            return LANE_ORDER.index(lane) if lane else 99
        except ValueError:
            return 99

    return sorted(heroes, key=lane_sort_key)
