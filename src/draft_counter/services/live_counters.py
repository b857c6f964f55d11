"""Best-effort counter harvesting from the public hero ranking page.

The ranking page is rendered dynamically and its markup changes without
notice, so extraction here is deliberately permissive and may return
nothing. Harvested pairs are only ever fed through the regular counter table
parser, the same as file data.
"""

import logging
import re
from typing import Optional

import httpx

from draft_counter.models.matchup import MatchupRecord

logger = logging.getLogger(__name__)

# Fixed score given to every "counter hero" listed on the page
LISTED_COUNTER_SCORE = 3.0

_HERO_BLOCK_SPLIT = re.compile(r"HERO[\s\S]*?PICK RATE", re.IGNORECASE)
_TARGET_HERO = re.compile(r"([A-Z][A-Za-z' -]{2,})[\s\S]{0,80}?WIN RATE", re.IGNORECASE)
_RANKED_COUNTER = re.compile(r"(?:1st|2nd|3rd|4th|5th)\s*\.?\s*([A-Z][A-Za-z' -]{2,})")


def extract_counter_pairs(html: str, score: float = LISTED_COUNTER_SCORE) -> list[MatchupRecord]:
    """Pull (counter, target) pairs out of ranking page text.

    Each hero section is expected to name the target hero shortly before its
    win rate, followed by a ranked "1st ... 5th" list of heroes that counter
    it.
    """
    pairs: list[MatchupRecord] = []
    for block in _HERO_BLOCK_SPLIT.split(html):
        target = _TARGET_HERO.search(block)
        if not target:
            continue
        target_hero = target.group(1).strip()
        for counter in _RANKED_COUNTER.findall(block):
            pairs.append(MatchupRecord(counter.strip(), target_hero, score))
    return pairs


def dedupe_max(records: list[MatchupRecord]) -> list[MatchupRecord]:
    """Keep one record per (my_hero, enemy_hero), with the highest score."""
    best: dict[tuple[str, str], float] = {}
    for record in records:
        key = (record.my_hero, record.enemy_hero)
        if key not in best or record.score > best[key]:
            best[key] = record.score
    return [MatchupRecord(my, enemy, score) for (my, enemy), score in best.items()]


class LiveCounterClient:
    """Fetches the ranking page and extracts counter pairs from it."""

    USER_AGENT = "Mozilla/5.0 DraftCounterBot"

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch_counters(self) -> list[MatchupRecord]:
        """Fetch the page and return deduplicated counter pairs.

        Raises:
            httpx.HTTPError: If the page cannot be fetched
        """
        client = await self._get_client()
        response = await client.get(
            self.url,
            headers={"user-agent": self.USER_AGENT, "Cache-Control": "no-store"},
        )
        response.raise_for_status()
        pairs = dedupe_max(extract_counter_pairs(response.text))
        logger.info(f"Extracted {len(pairs)} counter pairs from {self.url}")
        return pairs
