"""Counter dataset models."""

from dataclasses import dataclass
from functools import cached_property


@dataclass(frozen=True)
class MatchupRecord:
    """A single counter score: how strongly my_hero counters enemy_hero."""

    my_hero: str
    enemy_hero: str
    score: float  # Positive = my_hero counters enemy_hero; scale set by the source

    def to_dict(self) -> dict:
        return {"my_hero": self.my_hero, "enemy_hero": self.enemy_hero, "score": self.score}


@dataclass(frozen=True)
class CounterDataset:
    """Immutable snapshot of counter records for one data generation."""

    records: tuple[MatchupRecord, ...] = ()
    version: int = 0

    def __len__(self) -> int:
        return len(self.records)

    @cached_property
    def heroes(self) -> list[str]:
        """Every hero name in the dataset, in first-seen order."""
        seen: dict[str, None] = {}
        for record in self.records:
            seen.setdefault(record.my_hero, None)
            seen.setdefault(record.enemy_hero, None)
        return list(seen)

    @cached_property
    def score_table(self) -> dict[tuple[str, str], float]:
        """Direct lookup keyed by lowercase (my_hero, enemy_hero).

        When a pair appears more than once the last loaded record wins.
        """
        table: dict[tuple[str, str], float] = {}
        for record in self.records:
            table[(record.my_hero.lower(), record.enemy_hero.lower())] = record.score
        return table

    def get_score(self, my_hero: str, enemy_hero: str) -> float:
        """Counter score of my_hero over enemy_hero, 0.0 when unrecorded."""
        return self.score_table.get((my_hero.lower(), enemy_hero.lower()), 0.0)

