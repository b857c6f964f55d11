"""Greedy counter-pick suggestions against an enemy roster."""
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from draft_counter.models.matchup import CounterDataset
from draft_counter.models.recommendations import AssignedCounter, SuggestionResult
from draft_counter.utils.lane_normalizer import is_canonical_lane


@dataclass
class _Candidate:
    hero: str
    enemy_key: str  # Lowercase enemy name
    score: float
    lane: Optional[str] = None

    @property
    def hero_key(self) -> str:
        return self.hero.lower()


def _distinct_enemies(enemies: Iterable[str]) -> dict[str, str]:
    """Map lowercase enemy name -> first-seen display name, skipping blanks."""
    distinct: dict[str, str] = {}
    for enemy in enemies:
        name = (enemy or "").strip()
        if name:
            distinct.setdefault(name.lower(), name)
    return distinct


def _build_candidates(
    dataset: CounterDataset,
    enemy_keys: set[str],
    lanes: Optional[Mapping[str, str]],
) -> list[_Candidate]:
    candidates = []
    for record in dataset.records:
        enemy_key = record.enemy_hero.strip().lower()
        if enemy_key not in enemy_keys:
            continue
        lane = None
        if lanes is not None:
            lane = lanes.get(record.my_hero.strip().lower())
            if not is_canonical_lane(lane):
                continue
        candidates.append(_Candidate(record.my_hero, enemy_key, record.score, lane))

    # Score descending; hero then enemy name pin the order of tied scores
    candidates.sort(key=lambda c: (-c.score, c.hero_key, c.enemy_key))
    return candidates


def suggest_counters(
    dataset: CounterDataset,
    enemies: Iterable[str],
    max_picks: int,
    lanes: Optional[Mapping[str, str]] = None,
) -> SuggestionResult:
    """Greedily assign counter heroes to enemy picks.

    The highest scoring (hero, enemy) pair is committed first, then every
    other candidate using the same hero, the same enemy or (with a lane map)
    the same lane is discarded. This is an approximation of a maximum-weight
    matching; it does not backtrack.

    Args:
        dataset: Counter records to draw candidates from
        enemies: Enemy roster slots; blanks are ignored, names compared
            case-insensitively
        max_picks: Maximum number of distinct heroes to choose
        lanes: Optional lane map keyed by lowercase hero name. When given,
            only heroes in one of the canonical lanes are considered and at
            most one hero is chosen per lane.

    Returns:
        SuggestionResult with one entry per distinct enemy (None when no
        counter was assigned).
    """
    display = _distinct_enemies(enemies)
    result = SuggestionResult(assignment={name: None for name in display.values()})
    if not display:
        return result

    remaining = set(display)
    used_heroes: set[str] = set()
    used_lanes: set[str] = set()
    candidates = _build_candidates(dataset, remaining, lanes)

    while remaining and len(result.chosen) < max_picks and candidates:
        candidate = candidates.pop(0)
        accepted = (
            candidate.enemy_key in remaining
            and candidate.hero_key not in used_heroes
            and (candidate.lane is None or candidate.lane not in used_lanes)
        )
        if accepted:
            remaining.discard(candidate.enemy_key)
            used_heroes.add(candidate.hero_key)
            if candidate.lane is not None:
                used_lanes.add(candidate.lane)
            result.chosen.append(candidate.hero)
            result.assignment[display[candidate.enemy_key]] = AssignedCounter(
                hero=candidate.hero, score=candidate.score, lane=candidate.lane
            )
            result.total += candidate.score

        candidates = [
            c for c in candidates
            if c.hero_key != candidate.hero_key
            and c.enemy_key != candidate.enemy_key
            and (candidate.lane is None or c.lane != candidate.lane)
        ]

    return result
