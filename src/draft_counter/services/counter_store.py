"""Current counter data generation and cached engine results."""

import logging
import threading
from collections import OrderedDict
from typing import Iterable, Optional

from draft_counter.models.matchup import CounterDataset, MatchupRecord
from draft_counter.models.recommendations import PairingResult, SuggestionResult
from draft_counter.services.data_loader import TableLoader
from draft_counter.services.hero_resolver import HeroResolver
from draft_counter.services.suggestion_engine import suggest_counters
from draft_counter.services.table_parser import (
    format_counter_table,
    parse_counter_table,
    parse_lane_table,
)
from draft_counter.services.win_estimator import WinEstimator

logger = logging.getLogger(__name__)

CACHE_SIZE = 256


class CounterStore:
    """Holds the counter dataset, hero vocabulary and lane map.

    Each load replaces the whole generation; nothing is updated in place.
    Engine results are memoized per generation and dropped on every load.
    """

    def __init__(self, win_estimator: Optional[WinEstimator] = None):
        self.win_estimator = win_estimator or WinEstimator()
        self._lock = threading.Lock()
        self._version = 0
        self._lanes_version = 0
        self.dataset = CounterDataset()
        self.lanes: dict[str, str] = {}
        self.resolver = HeroResolver([])
        self._cache: OrderedDict[tuple, object] = OrderedDict()

    def _next_version(self) -> int:
        self._version += 1
        return self._version

    def load_records(self, records: Iterable[MatchupRecord]) -> int:
        """Replace the dataset with records. Returns the record count.

        An empty load keeps the current generation.
        """
        records = tuple(records)
        if not records:
            logger.warning("Counter load produced no rows; keeping current dataset")
            return 0
        with self._lock:
            self.dataset = CounterDataset(records=records, version=self._next_version())
            self.resolver = HeroResolver(self.dataset.heroes)
            self._cache.clear()
        logger.info(
            f"Loaded {len(records)} counter rows ({len(self.dataset.heroes)} heroes), "
            f"version {self.dataset.version}"
        )
        return len(records)

    def load_counters(self, text: str) -> int:
        """Parse a counter table and load it."""
        return self.load_records(parse_counter_table(text))

    def load_counter_rows(self, rows: Iterable[MatchupRecord]) -> int:
        """Load externally harvested rows through the counter table parser."""
        return self.load_counters(format_counter_table(rows))

    def load_lanes(self, text: str) -> int:
        """Parse a lane table and replace the lane map. Returns the hero count."""
        lanes = parse_lane_table(text)
        if not lanes:
            logger.warning("Lane load produced no rows; keeping current lane map")
            return 0
        with self._lock:
            self.lanes = lanes
            self._lanes_version += 1
            self._cache.clear()
        logger.info(f"Loaded lanes for {len(lanes)} heroes")
        return len(lanes)

    async def refresh(self, loader: TableLoader, counters_source: str, lanes_source: str) -> dict:
        """Reload both tables from their sources."""
        rows = self.load_counters(await loader.load(counters_source))
        lanes = self.load_lanes(await loader.load(lanes_source))
        return {"rows_loaded": rows, "lanes_loaded": lanes, **self.status()}

    def status(self) -> dict:
        return {
            "version": self.dataset.version,
            "rows": len(self.dataset),
            "heroes": len(self.dataset.heroes),
            "lanes": len(self.lanes),
        }

    def resolve(self, text: str) -> str:
        return self.resolver.resolve(text)

    def _cached(self, key: tuple, compute):
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]
        value = compute()
        with self._lock:
            self._cache[key] = value
            if len(self._cache) > CACHE_SIZE:
                self._cache.popitem(last=False)
        return value

    def suggest(self, enemies: list[str], max_picks: int, by_lane: bool = True) -> SuggestionResult:
        """Suggest counters to an enemy roster.

        With by_lane and a loaded lane map, suggestions are limited to one
        hero per lane.
        """
        with self._lock:
            dataset, lanes, lanes_version = self.dataset, self.lanes, self._lanes_version
        if not (by_lane and lanes):
            lanes, lanes_version = None, None
        key = ("suggest", dataset.version, lanes_version, tuple(enemies), max_picks)
        return self._cached(key, lambda: suggest_counters(dataset, enemies, max_picks, lanes))

    def estimate(self, team_a: list[str], team_b: list[str]) -> Optional[PairingResult]:
        """Estimate team A's win probability against team B."""
        with self._lock:
            dataset = self.dataset
        key = ("estimate", dataset.version, tuple(team_a), tuple(team_b))
        return self._cached(key, lambda: self.win_estimator.estimate(dataset, team_a, team_b))
