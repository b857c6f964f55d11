"""Tests for counter and lane table parsing."""
from draft_counter.models.matchup import CounterDataset, MatchupRecord
from draft_counter.services.table_parser import (
    format_counter_table,
    parse_counter_table,
    parse_lane_table,
    parse_score,
    sniff_delimiter,
)


def test_parse_basic_comma_table():
    text = "my_hero,enemy_hero,score\nKhufra,Fanny,6.5\nSaber,Fanny,5\n"
    records = parse_counter_table(text)
    assert records == [
        MatchupRecord("Khufra", "Fanny", 6.5),
        MatchupRecord("Saber", "Fanny", 5.0),
    ]


def test_header_synonyms_case_insensitive_and_reordered():
    text = "Advantage;Enemy;Hero\n2,5;Ling;Chou\n"
    records = parse_counter_table(text)
    assert records == [MatchupRecord("Chou", "Ling", 2.5)]


def test_tab_delimited_with_bom_comments_and_crlf():
    text = "\ufeff# exported counters\r\nhero\tenemy hero\tadv\r\n\r\nKaja\tFanny\t4.5\r\n# trailing note\r\n"
    records = parse_counter_table(text)
    assert records == [MatchupRecord("Kaja", "Fanny", 4.5)]


def test_quoted_fields_are_stripped():
    text = "\"my_hero\",\"enemy_hero\",\"score\"\n\"Baxia\",'Estes',\"5.5\"\n"
    records = parse_counter_table(text)
    assert records == [MatchupRecord("Baxia", "Estes", 5.5)]


def test_missing_required_column_yields_empty_dataset():
    assert parse_counter_table("hero,enemy,winrate\nA,B,3\n") == []
    assert parse_counter_table("") == []
    assert parse_counter_table("# only a comment\n\n") == []


def test_bad_rows_are_dropped_silently():
    text = "\n".join([
        "my_hero,enemy_hero,score",
        "A,B,3",
        "A,B,not-a-number",
        ",B,2",
        "A,,2",
        "A,B",
        "A,B,nan",
        "A,B,inf",
        "C,D,",
        "E,F,-1.5",
    ])
    records = parse_counter_table(text)
    assert records == [MatchupRecord("A", "B", 3.0), MatchupRecord("E", "F", -1.5)]


def test_parse_score_decimal_comma():
    assert parse_score("3,25") == 3.25
    assert parse_score("'7'") == 7.0
    assert parse_score("") is None
    assert parse_score("1e999") is None


def test_sniff_delimiter_priority():
    assert sniff_delimiter("a\tb;c,d") == "\t"
    assert sniff_delimiter("a;b,c") == ";"
    assert sniff_delimiter("a,b") == ","
    assert sniff_delimiter("single") == ","


def test_round_trip_last_loaded_score_wins():
    """A formatted table parses back; duplicates resolve to the last record."""
    records = [
        MatchupRecord("Karrie", "Uranus", 5.5),
        MatchupRecord("Natalia", "Miya", 5.5),
        MatchupRecord("Karrie", "Uranus", 2.0),
        MatchupRecord("Lapu-Lapu", "Chang'e", 1.25),
    ]
    parsed = parse_counter_table(format_counter_table(records))
    assert parsed == records

    dataset = CounterDataset(records=tuple(parsed))
    assert dataset.get_score("Karrie", "Uranus") == 2.0
    assert dataset.get_score("natalia", "MIYA") == 5.5
    assert dataset.get_score("Lapu-Lapu", "Chang'e") == 1.25
    assert dataset.get_score("Miya", "Natalia") == 0.0


def test_parse_lane_table():
    text = "Hero,Lane\nKarrie,gold lane\nValir,mid\nChou,EXP\nOdd,Side lane\nNoLane,\n"
    lanes = parse_lane_table(text)
    assert lanes == {
        "karrie": "Gold",
        "valir": "Mid",
        "chou": "EXP",
        "odd": "Side Lane",
    }


def test_lane_table_requires_header():
    """A headerless lane table is rejected rather than guessed at."""
    assert parse_lane_table("Karrie,Gold\nValir,Mid\n") == {}
    assert parse_lane_table("") == {}


def test_lane_table_semicolon_and_role_column():
    lanes = parse_lane_table("name;role\nNatalia;roamer\n")
    assert lanes == {"natalia": "Roam"}
