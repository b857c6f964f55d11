"""Draft room state models."""

from dataclasses import asdict, dataclass, field
from typing import Literal

ROSTER_SIZE = 5
MIN_PICKS = 1
MAX_PICKS = 5

Side = Literal["A", "B"]  # A = our team, B = enemy team


def empty_roster() -> list[str]:
    return [""] * ROSTER_SIZE


def clamp_max_picks(value: int) -> int:
    """Clamp a requested suggestion count to the allowed range."""
    return max(MIN_PICKS, min(MAX_PICKS, value))


@dataclass
class RoomState:
    """Shared draft state of one room."""

    room: str
    k: int = MAX_PICKS  # Max suggested picks
    team_a: list[str] = field(default_factory=empty_roster)
    team_b: list[str] = field(default_factory=empty_roster)
    bans_a: list[str] = field(default_factory=empty_roster)
    bans_b: list[str] = field(default_factory=empty_roster)

    @property
    def is_empty(self) -> bool:
        """True while no pick or ban slot holds any text."""
        return not any(self.team_a + self.team_b + self.bans_a + self.bans_b)

    @property
    def all_picked(self) -> bool:
        """True once both teams have filled every pick slot."""
        return all(self.team_a) and all(self.team_b)

    def picks(self, side: Side) -> list[str]:
        return self.team_a if side == "A" else self.team_b

    def bans(self, side: Side) -> list[str]:
        return self.bans_a if side == "A" else self.bans_b

    def to_dict(self) -> dict:
        return asdict(self)
