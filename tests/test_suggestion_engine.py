"""Tests for greedy counter suggestions."""
import pytest

from draft_counter.models.matchup import CounterDataset, MatchupRecord
from draft_counter.services.suggestion_engine import suggest_counters


def make_dataset(*rows):
    return CounterDataset(records=tuple(MatchupRecord(*row) for row in rows))


@pytest.fixture
def dataset():
    return make_dataset(
        ("Khufra", "Fanny", 6.5),
        ("Saber", "Fanny", 5.0),
        ("Khufra", "Ling", 5.5),
        ("Chou", "Ling", 5.5),
        ("Karrie", "Uranus", 5.5),
        ("Natalia", "Miya", 5.0),
        ("Kaja", "Miya", 4.5),
        ("Valir", "Alucard", 5.0),
        ("Ruby", "Alucard", 4.5),
    )


@pytest.fixture
def lanes():
    return {
        "khufra": "Roam",
        "saber": "Jungle",
        "chou": "EXP",
        "karrie": "Gold",
        "natalia": "Roam",
        "kaja": "Roam",
        "valir": "Mid",
        "ruby": "Side Lane",
    }


def test_greedy_example_leaves_enemy_unassigned():
    """The best pick consumes Hero A; nothing else covers Enemy Y."""
    dataset = make_dataset(
        ("Hero A", "Enemy X", 5),
        ("Hero B", "Enemy X", 3),
        ("Hero A", "Enemy Y", 4),
    )
    result = suggest_counters(dataset, ["Enemy X", "Enemy Y"], max_picks=5)

    assert result.chosen == ["Hero A"]
    assert result.assignment["Enemy X"].hero == "Hero A"
    assert result.assignment["Enemy X"].score == 5
    assert result.assignment["Enemy Y"] is None
    assert result.total == 5


def test_empty_roster_gives_empty_result(dataset):
    result = suggest_counters(dataset, ["", "  ", ""], max_picks=5)
    assert result.chosen == []
    assert result.assignment == {}
    assert result.total == 0


def test_enemy_without_data_stays_none(dataset):
    result = suggest_counters(dataset, ["Fanny", "Gusion"], max_picks=5)
    assert result.assignment["Fanny"].hero == "Khufra"
    assert result.assignment["Gusion"] is None


def test_enemy_names_are_case_insensitive_first_casing_kept(dataset):
    result = suggest_counters(dataset, ["fanny", "FANNY", "Ling"], max_picks=5)
    assert list(result.assignment) == ["fanny", "Ling"]
    assert result.assignment["fanny"].hero == "Khufra"
    # Khufra is used up on Fanny, so Ling gets Chou
    assert result.assignment["Ling"].hero == "Chou"
    assert result.total == pytest.approx(12.0)


def test_unconstrained_picks_are_unique_and_bounded(dataset):
    enemies = ["Fanny", "Ling", "Uranus", "Miya", "Alucard"]
    result = suggest_counters(dataset, enemies, max_picks=5)

    assert len(result.chosen) == len(set(result.chosen))
    assert len(result.chosen) <= 5
    assert set(result.assignment) == set(enemies)
    assert result.total == pytest.approx(
        sum(a.score for a in result.assignment.values() if a is not None)
    )


def test_max_picks_bounds_distinct_heroes(dataset):
    enemies = ["Fanny", "Ling", "Uranus", "Miya", "Alucard"]
    result = suggest_counters(dataset, enemies, max_picks=2)

    assert result.chosen == ["Khufra", "Chou"]
    assert sum(1 for a in result.assignment.values() if a is not None) == 2


def test_lane_mode_uses_each_lane_once(dataset, lanes):
    enemies = ["Fanny", "Ling", "Uranus", "Miya", "Alucard"]
    result = suggest_counters(dataset, enemies, max_picks=5, lanes=lanes)

    assigned = [a for a in result.assignment.values() if a is not None]
    used_lanes = [a.lane for a in assigned]
    assert len(used_lanes) == len(set(used_lanes))
    # Khufra takes Roam on Fanny, so neither Natalia nor Kaja can cover Miya
    assert result.assignment["Fanny"].hero == "Khufra"
    assert result.assignment["Miya"] is None


def test_lane_mode_skips_heroes_outside_canonical_lanes(dataset, lanes):
    """Ruby's lane is not canonical and Saber has no row for Alucard."""
    result = suggest_counters(dataset, ["Alucard"], max_picks=5, lanes={"ruby": "Side Lane"})
    assert result.assignment["Alucard"] is None

    result = suggest_counters(dataset, ["Alucard"], max_picks=5, lanes=lanes)
    assert result.assignment["Alucard"].hero == "Valir"
    assert result.assignment["Alucard"].lane == "Mid"


def test_tied_scores_break_on_hero_name():
    dataset = make_dataset(
        ("Zilong", "Layla", 4.0),
        ("Alpha", "Layla", 4.0),
    )
    result = suggest_counters(dataset, ["Layla"], max_picks=5)
    assert result.chosen == ["Alpha"]


def test_suggestions_never_name_foreign_enemies(dataset):
    result = suggest_counters(dataset, ["Miya"], max_picks=5)
    assert list(result.assignment) == ["Miya"]
    assert result.chosen == ["Natalia"]


def test_to_dict_serializes_assignment(dataset):
    data = suggest_counters(dataset, ["Fanny", "Gusion"], max_picks=5).to_dict()
    assert data["assignment"]["Fanny"] == {"hero": "Khufra", "score": 6.5, "lane": None}
    assert data["assignment"]["Gusion"] is None
    assert data["chosen"] == ["Khufra"]
