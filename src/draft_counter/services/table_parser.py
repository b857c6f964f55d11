"""Parsers for counter and lane tables.

Both parsers are forgiving: a malformed row is skipped, and a table whose
header cannot be mapped parses to an empty result. Nothing here raises on
bad input.
"""
import logging
import math
from typing import Iterable, Optional

from draft_counter.models.matchup import MatchupRecord
from draft_counter.utils.lane_normalizer import normalize_lane

logger = logging.getLogger(__name__)

# Header synonyms, checked in order
HERO_COLUMNS = ("my_hero", "my hero", "myhero", "hero")
ENEMY_COLUMNS = ("enemy_hero", "enemy hero", "enemyhero", "enemy")
SCORE_COLUMNS = ("score", "adv", "advantage")

LANE_HERO_COLUMNS = ("hero", "my_hero", "name", "hero_name")
LANE_COLUMNS = ("lane", "role", "position")

QUOTE_CHARS = "'\""
BOM = "\ufeff"


def _clean_lines(text: str) -> list[str]:
    """Strip BOM, normalize newlines, drop blank and comment lines."""
    if text.startswith(BOM):
        text = text[1:]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.strip() for line in text.split("\n")]
    return [line for line in lines if line and not line.startswith("#")]


def sniff_delimiter(line: str) -> str:
    """Pick the delimiter from a header line: tab, then semicolon, then comma."""
    if "\t" in line:
        return "\t"
    if ";" in line:
        return ";"
    return ","


def _unquote(value: str) -> str:
    value = value.strip()
    if value and value[0] in QUOTE_CHARS:
        value = value[1:]
    if value and value[-1] in QUOTE_CHARS:
        value = value[:-1]
    return value.strip()


def _split_rows(lines: list[str], delimiter: str) -> list[list[str]]:
    return [[_unquote(cell) for cell in line.split(delimiter)] for line in lines]


def _find_column(header: list[str], synonyms: Iterable[str]) -> Optional[int]:
    index = {name.lower(): i for i, name in enumerate(header)}
    for name in synonyms:
        if name in index:
            return index[name]
    return None


def parse_score(raw: str) -> Optional[float]:
    """Parse a score cell, accepting a decimal comma. None if not finite."""
    value = _unquote(raw).replace(",", ".", 1)
    try:
        score = float(value)
    except ValueError:
        return None
    return score if math.isfinite(score) else None


def parse_counter_table(text: str) -> list[MatchupRecord]:
    """Parse a counter table into matchup records.

    Args:
        text: Delimited text with a header row naming hero, enemy and score
            columns (see HERO_COLUMNS, ENEMY_COLUMNS, SCORE_COLUMNS).

    Returns:
        Records in table order. Empty if the header lacks a required column.
    """
    if not text:
        return []

    lines = _clean_lines(text)
    if not lines:
        return []

    rows = _split_rows(lines, sniff_delimiter(lines[0]))
    header = rows[0]
    idx_hero = _find_column(header, HERO_COLUMNS)
    idx_enemy = _find_column(header, ENEMY_COLUMNS)
    idx_score = _find_column(header, SCORE_COLUMNS)
    if idx_hero is None or idx_enemy is None or idx_score is None:
        logger.warning(f"Counter table header not recognized: {header}")
        return []

    width = max(idx_hero, idx_enemy, idx_score)
    records: list[MatchupRecord] = []
    for row in rows[1:]:
        if len(row) <= width:
            continue
        my_hero = row[idx_hero]
        enemy_hero = row[idx_enemy]
        score = parse_score(row[idx_score])
        if not my_hero or not enemy_hero or score is None:
            continue
        records.append(MatchupRecord(my_hero, enemy_hero, score))

    return records


def parse_lane_table(text: str) -> dict[str, str]:
    """Parse a hero/lane table into a lane map keyed by lowercase hero name.

    The header row is required. Lane labels are normalized; unknown labels
    are kept title-cased.
    """
    if not text:
        return {}

    lines = _clean_lines(text)
    if not lines:
        return {}

    rows = _split_rows(lines, sniff_delimiter(lines[0]))
    header = rows[0]
    idx_hero = _find_column(header, LANE_HERO_COLUMNS)
    idx_lane = _find_column(header, LANE_COLUMNS)
    if idx_hero is None or idx_lane is None:
        logger.warning(f"Lane table header not recognized: {header}")
        return {}

    lanes: dict[str, str] = {}
    for row in rows[1:]:
        if len(row) <= max(idx_hero, idx_lane):
            continue
        hero = row[idx_hero]
        lane = normalize_lane(row[idx_lane])
        if hero and lane:
            lanes[hero.lower()] = lane

    return lanes


def format_counter_table(records: Iterable[MatchupRecord]) -> str:
    """Render records as a tab-delimited counter table."""
    lines = ["my_hero\tenemy_hero\tscore"]
    for record in records:
        lines.append(f"{record.my_hero}\t{record.enemy_hero}\t{record.score}")
    return "\n".join(lines) + "\n"
