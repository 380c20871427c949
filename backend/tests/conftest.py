import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tennis_league.schemas import MatchRecord, PlayerRegistration  # noqa: E402

LEAGUE_ID = "league-1"
SEASON = "verano-2025"


@pytest.fixture
def make_player():
    """Build a PlayerRegistration for the default league and season."""

    def _make(player_id, name=None, *, status="active", elo=None, level="intermediate", **extra):
        data = {
            "playerId": player_id,
            "name": name or player_id.upper(),
            "status": status,
            "level": level,
            "leagueId": LEAGUE_ID,
            "season": SEASON,
        }
        if elo is not None:
            data["eloRating"] = elo
        data.update(extra)
        return PlayerRegistration.model_validate(data)

    return _make


@pytest.fixture
def make_match():
    """Build a completed MatchRecord; ``sets`` is a list of (p1, p2) pairs."""

    counter = {"n": 0}

    def _make(
        player1,
        player2,
        sets=(),
        *,
        winner=None,
        walkover=False,
        round=1,
        status="completed",
        match_type="regular",
        season=SEASON,
        league_id=LEAGUE_ID,
    ):
        counter["n"] += 1
        sets = [list(s) for s in sets]
        if winner is None and sets:
            p1_sets = sum(1 for a, b in sets if a > b)
            p2_sets = sum(1 for a, b in sets if b > a)
            winner = player1 if p1_sets > p2_sets else player2
        data = {
            "id": f"m{counter['n']}",
            "leagueId": league_id,
            "season": season,
            "round": round,
            "status": status,
            "matchType": match_type,
            "players": [player1, player2],
        }
        if status == "completed":
            data["result"] = {
                "winnerId": winner,
                "score": {"sets": sets, "walkover": walkover},
            }
        return MatchRecord.model_validate(data)

    return _make
