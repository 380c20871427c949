import logging

import pytest

from tennis_league.services.validation import (
    ValidationError,
    coerce_games,
    parse_matches,
    parse_registrations,
    require_completed,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (6, 6),
        ("7", 7),
        (" 10 ", 10),
        (6.9, 6),
        ("4.0", 4),
        (-3, 0),
        (None, 0),
        (True, 0),
        ("abc", 0),
        ("", 0),
        (float("nan"), 0),
        ([6], 0),
    ],
    ids=[
        "int",
        "numeric-string",
        "padded-string",
        "float",
        "float-string",
        "negative",
        "none",
        "boolean",
        "garbage",
        "empty",
        "nan",
        "list",
    ],
)
def test_coerce_games(raw, expected) -> None:
    assert coerce_games(raw) == expected


def _match_doc(**overrides):
    doc = {
        "_id": "m1",
        "league": "league-1",
        "season": "verano-2025",
        "round": 2,
        "status": "completed",
        "players": {"player1": "a", "player2": "b"},
        "result": {
            "winner": "a",
            "score": {"sets": [{"player1": 6, "player2": 3}, {"player1": 6, "player2": 4}]},
        },
    }
    doc.update(overrides)
    return doc


def test_parse_matches_accepts_documents() -> None:
    matches = parse_matches([_match_doc()])

    assert len(matches) == 1
    match = matches[0]
    assert match.id == "m1"
    assert match.league_id == "league-1"
    assert match.players == ("a", "b")
    assert match.result.winner_id == "a"
    assert match.score_display() == "6-3, 6-4"


@pytest.mark.parametrize(
    "overrides",
    [
        {"players": {"player1": "a", "player2": "a"}},
        {"players": {"player1": "a"}},
        {"round": 0},
        {"result": None},
        {"result": {"winner": "a", "score": {"sets": [], "walkover": False}}},
        {"status": "abandoned"},
    ],
    ids=[
        "same-player",
        "missing-player",
        "round-zero",
        "completed-without-result",
        "no-sets-no-walkover",
        "unknown-status",
    ],
)
def test_parse_matches_skips_broken_records(overrides, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        matches = parse_matches([_match_doc(), _match_doc(_id="bad", **overrides)])

    assert [m.id for m in matches] == ["m1"]
    assert "Skipping match #2 (bad)" in caplog.text


def test_parse_matches_skips_non_mapping_payloads(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        matches = parse_matches(["not a match", _match_doc()])
    assert len(matches) == 1
    assert "Skipping match #1 (no id)" in caplog.text


def test_parse_registrations_reads_nested_elo_and_defaults() -> None:
    registrations = parse_registrations(
        [
            {"_id": "p1", "name": " Ana ", "level": "advanced", "status": "Active", "stats": {"eloRating": 1287}},
            {"playerId": "p2", "name": "Bea", "eloRating": None},
            {"id": 3, "name": "Cris", "eloRating": 1234.6},
        ]
    )

    ana, bea, cris = registrations
    assert (ana.player_id, ana.name, ana.status, ana.elo_rating) == ("p1", "Ana", "active", 1287)
    assert (bea.player_id, bea.status, bea.elo_rating) == ("p2", None, 1200)
    assert (cris.player_id, cris.elo_rating) == ("3", 1235)


@pytest.mark.parametrize(
    "document, expected",
    [
        ({"eloRating": "n/a"}, 1200),
        ({"stats": {"eloRating": ""}}, 1200),
        ({"eloRating": 0}, 1200),
        ({"eloRating": float("inf")}, 1200),
        ({"eloRating": [1300]}, 1200),
        ({"eloRating": " 1310 "}, 1310),
        ({"stats": {"eloRating": "1150.5"}}, 1151),
    ],
    ids=["garbage", "nested-empty", "zero", "infinite", "list", "numeric-string", "nested-float-string"],
)
def test_parse_registrations_keeps_players_with_unreadable_elo(document, expected, caplog):
    with caplog.at_level(logging.WARNING):
        registrations = parse_registrations([{"playerId": "a", "name": "Ana", **document}])

    assert [r.player_id for r in registrations] == ["a"]
    assert registrations[0].elo_rating == expected
    assert "Skipping registration" not in caplog.text


def test_parse_registrations_skips_missing_ids(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        registrations = parse_registrations([{"name": "Nobody"}, {"playerId": "p1", "name": "Ana"}])
    assert [r.player_id for r in registrations] == ["p1"]
    assert "Skipping registration #1" in caplog.text


def test_require_completed(make_match) -> None:
    match = make_match("a", "b", [(6, 1), (6, 1)])
    assert require_completed(match) is match

    with pytest.raises(ValidationError, match="not completed"):
        require_completed(make_match("a", "b", status="scheduled"))

    with pytest.raises(ValidationError, match="one of the match players") as exc:
        require_completed(make_match("a", "b", [(6, 1), (6, 1)], winner="c"))
    assert "winner" in exc.value.detail
