#!/usr/bin/env python3
"""Audit counter and lane table quality.

Checks:
1. Coverage: How many heroes appear, and how many have a lane?
2. Duplicates: Which pairs are listed more than once (last row wins)?
3. Lanes: Which heroes map to a label outside the five canonical lanes?
4. Gaps: Which enemies have no counter rows at all?

Usage:
    python scripts/audit_counter_data.py
    python scripts/audit_counter_data.py --counters data/counters.csv --lanes data/lanes.csv
"""

import argparse
from collections import Counter
from pathlib import Path

from draft_counter.services.table_parser import parse_counter_table, parse_lane_table
from draft_counter.utils.lane_normalizer import LANE_ORDER, is_canonical_lane

DATA_DIR = Path(__file__).parent.parent / "data"


def read_text(path: Path) -> str:
    if not path.exists():
        print(f"Missing file: {path}")
        return ""
    return path.read_text(encoding="utf-8")


def main():
    parser = argparse.ArgumentParser(description="Audit counter and lane tables")
    parser.add_argument(
        "--counters",
        type=Path,
        default=DATA_DIR / "counters.csv",
        help="Path to counter table",
    )
    parser.add_argument(
        "--lanes",
        type=Path,
        default=DATA_DIR / "lanes.csv",
        help="Path to lane table",
    )
    args = parser.parse_args()

    records = parse_counter_table(read_text(args.counters))
    lanes = parse_lane_table(read_text(args.lanes))

    print("=" * 70)
    print("COUNTER DATA AUDIT")
    print("=" * 70)

    heroes = {r.my_hero.lower(): r.my_hero for r in records}
    enemies = {r.enemy_hero.lower(): r.enemy_hero for r in records}
    all_heroes = {**enemies, **heroes}

    print(f"\n--- COVERAGE ---")
    print(f"Counter rows: {len(records)}")
    print(f"Distinct heroes: {len(all_heroes)}")
    print(f"Heroes with a lane: {sum(1 for key in all_heroes if key in lanes)}/{len(all_heroes)}")
    if records:
        scores = [r.score for r in records]
        print(f"Score range: {min(scores)} to {max(scores)}")

    print(f"\n--- BY LANE ---")
    lane_counts = Counter(lanes.values())
    for lane in LANE_ORDER:
        print(f"  {lane:8} {lane_counts.get(lane, 0)}")

    pair_counts = Counter((r.my_hero.lower(), r.enemy_hero.lower()) for r in records)
    duplicates = [pair for pair, count in pair_counts.items() if count > 1]
    print(f"\n--- DUPLICATE PAIRS ({len(duplicates)}) ---")
    for my_hero, enemy_hero in duplicates:
        print(f"  {my_hero} vs {enemy_hero}: {pair_counts[(my_hero, enemy_hero)]} rows")

    odd_lanes = sorted((hero, lane) for hero, lane in lanes.items() if not is_canonical_lane(lane))
    print(f"\n--- NON-CANONICAL LANES ({len(odd_lanes)}) ---")
    for hero, lane in odd_lanes:
        print(f"  {hero}: {lane}")

    # Heroes never listed as an enemy get no suggestions against them
    uncovered = sorted(name for key, name in all_heroes.items() if key not in enemies)
    print(f"\n--- HEROES WITHOUT COUNTERS ({len(uncovered)}) ---")
    for name in uncovered:
        print(f"  {name}")

    # Heroes without a lane are skipped by lane-constrained suggestions
    unlaned = sorted(name for key, name in heroes.items() if key not in lanes)
    print(f"\n--- COUNTER PICKS WITHOUT A LANE ({len(unlaned)}) ---")
    for name in unlaned:
        print(f"  {name}")


if __name__ == "__main__":
    main()
