"""Win probability from the optimal one-to-one pairing of two rosters."""
import math
from itertools import permutations
from typing import Optional

from draft_counter.models.matchup import CounterDataset
from draft_counter.models.recommendations import MatchupPair, PairingResult

MAX_PAIRS = 5


def logistic(x: float, slope: float, midpoint: float = 0.0) -> float:
    """Logistic curve 1 / (1 + e^(-slope * (x - midpoint)))."""
    z = slope * (x - midpoint)
    # Split on sign so exp() never overflows
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def _trimmed(roster: list[str]) -> list[str]:
    return [name.strip() for name in roster if name and name.strip()]


class WinEstimator:
    """Estimates team A's win chance against team B.

    The signal fed to the logistic curve is the total counter score of the
    best one-to-one pairing between the two rosters. With at most five heroes
    a side that is at most 120 permutations, so the search is exhaustive.
    """

    DEFAULT_SLOPE = 0.35
    DEFAULT_MIDPOINT = 6.0
    DEFAULT_DISPLAY_RANGE = (5, 95)

    def __init__(
        self,
        slope: float = DEFAULT_SLOPE,
        midpoint: float = DEFAULT_MIDPOINT,
        display_min: int = DEFAULT_DISPLAY_RANGE[0],
        display_max: int = DEFAULT_DISPLAY_RANGE[1],
    ):
        if display_min > display_max:
            raise ValueError(f"Invalid display range: {display_min} > {display_max}")
        self.slope = slope
        self.midpoint = midpoint
        self.display_min = display_min
        self.display_max = display_max

    def win_probability(self, total: float) -> float:
        return logistic(total, self.slope, self.midpoint)

    def display_percent(self, probability: float) -> int:
        """Whole percentage clamped to the display range."""
        percent = int(round(probability * 100))
        return max(self.display_min, min(self.display_max, percent))

    def best_pairing(
        self, dataset: CounterDataset, team_a: list[str], team_b: list[str]
    ) -> tuple[list[MatchupPair], float]:
        """Find the pairing of A's heroes against B's that maximizes total score.

        Only the first min(len(A), len(B), 5) heroes of each side take part.
        Ties keep the first permutation found.
        """
        n = min(len(team_a), len(team_b), MAX_PAIRS)
        own = team_a[:n]
        table = dataset.score_table

        best_order: tuple[str, ...] = tuple(team_b[:n])
        best_total = -math.inf
        for order in permutations(team_b[:n]):
            total = sum(
                table.get((a.lower(), b.lower()), 0.0) for a, b in zip(own, order)
            )
            if total > best_total:
                best_total = total
                best_order = order

        pairs = [
            MatchupPair(own=a, opposing=b, score=table.get((a.lower(), b.lower()), 0.0))
            for a, b in zip(own, best_order)
        ]
        return pairs, (best_total if pairs else 0.0)

    def estimate(
        self, dataset: CounterDataset, team_a: list[str], team_b: list[str]
    ) -> Optional[PairingResult]:
        """Estimate team A's win probability. None if either roster is empty."""
        own = _trimmed(team_a)
        opposing = _trimmed(team_b)
        if not own or not opposing:
            return None

        pairs, total = self.best_pairing(dataset, own, opposing)
        probability = self.win_probability(total)
        return PairingResult(
            pairs=pairs,
            total=total,
            win_probability=probability,
            percent=self.display_percent(probability),
        )
