"""Fuzzy hero name resolution against the counter dataset vocabulary."""
import math
import re
from typing import Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9]")

# Accept a fuzzy match when distance <= max(MIN_THRESHOLD, ceil(len * RATIO))
MIN_THRESHOLD = 2
THRESHOLD_RATIO = 0.4


def normalize_name(name: str) -> str:
    """Lowercase and strip every non-alphanumeric character."""
    return _NON_ALNUM.sub("", (name or "").lower())


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance with unit insert/delete/substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def match_threshold(input_key: str, candidate_key: str) -> int:
    """Largest edit distance accepted between two normalized names."""
    length = max(MIN_THRESHOLD, min(len(input_key), len(candidate_key)))
    return max(MIN_THRESHOLD, math.ceil(length * THRESHOLD_RATIO))


class HeroResolver:
    """Resolves free-text hero names to canonical dataset names.

    Resolution is meant for commit points (an input losing focus, an explicit
    confirm), not for every keystroke: a half-typed name would otherwise be
    rewritten while the user is still typing it.
    """

    def __init__(self, heroes: Iterable[str]):
        self.heroes: list[str] = list(dict.fromkeys(heroes))
        self._indexed = [(hero, normalize_name(hero)) for hero in self.heroes]
        self._exact: dict[str, str] = {}
        for hero, key in self._indexed:
            self._exact.setdefault(key, hero)

    def resolve(self, text: str) -> str:
        """Return the canonical name closest to text.

        Empty input resolves to "". An exact match on the normalized form
        returns the canonical name; otherwise the nearest name by edit
        distance is returned if it is within the threshold. Input with no
        acceptable match comes back unchanged.
        """
        if not text or not text.strip():
            return ""

        key = normalize_name(text)
        hit = self._exact.get(key)
        if hit is not None:
            return hit

        best: str | None = None
        best_key = ""
        best_distance = math.inf
        for hero, hero_key in self._indexed:
            distance = levenshtein(key, hero_key)
            if distance < best_distance:
                best, best_key, best_distance = hero, hero_key, distance

        if best is not None and best_distance <= match_threshold(key, best_key):
            return best
        return text
