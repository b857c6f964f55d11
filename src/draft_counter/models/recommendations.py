"""Suggestion and win-estimate result models."""

from dataclasses import asdict, dataclass, field


@dataclass
class AssignedCounter:
    """Hero assigned to counter one enemy pick."""

    hero: str
    score: float
    lane: str | None = None  # Set only for lane-constrained suggestions


@dataclass
class SuggestionResult:
    """Greedy counter assignment against an enemy roster."""

    chosen: list[str] = field(default_factory=list)  # Selection order, no duplicates
    assignment: dict[str, AssignedCounter | None] = field(default_factory=dict)
    total: float = 0.0

    def counter_for(self, hero: str) -> tuple[str, AssignedCounter] | None:
        """Find the (enemy, assignment) pair a chosen hero was picked against."""
        for enemy, assigned in self.assignment.items():
            if assigned is not None and assigned.hero == hero:
                return enemy, assigned
        return None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "chosen": list(self.chosen),
            "assignment": {
                enemy: asdict(assigned) if assigned is not None else None
                for enemy, assigned in self.assignment.items()
            },
            "total": self.total,
        }


@dataclass
class MatchupPair:
    """One own-vs-opposing pairing inside an optimal assignment."""

    own: str
    opposing: str
    score: float


@dataclass
class PairingResult:
    """Most favorable one-to-one pairing between two rosters."""

    pairs: list[MatchupPair]
    total: float
    win_probability: float  # Unclamped logistic output in [0, 1]
    percent: int  # Display percentage, clamped to the configured range

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return asdict(self)
