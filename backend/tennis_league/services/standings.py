"""League standings.

Completed matches are folded into one :class:`StatLine` per registered
player, the players are ordered by the league's tie-break rules and each row
gets its derived percentages and rating delta. Everything here is pure: the
inputs are never mutated and every call builds fresh stat lines.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..name_utils import collation_key
from ..schemas import MatchRecord, PlayerRegistration, StandingsRow, StatLine
from ..score_utils import percentage
from ..scoring.points import PointsFunction, get_points_table
from .rating import elo_change

logger = logging.getLogger(__name__)

STATUS_PRIORITY: Mapping[str, int] = {
    "active": 0,
    "confirmed": 1,
    "pending": 2,
    "inactive": 3,
}
UNKNOWN_STATUS_PRIORITY = 99

WALKOVER_SETS = 2
WALKOVER_GAMES = 12
SUPER_TIEBREAK_SET_INDEX = 2
SUPER_TIEBREAK_MIN_SCORE = 10

Pair = Tuple[int, int]


def status_priority(status: Optional[str]) -> int:
    """Missing statuses rank as inactive; unrecognised ones rank last."""
    if not status:
        return STATUS_PRIORITY["inactive"]
    return STATUS_PRIORITY.get(status, UNKNOWN_STATUS_PRIORITY)


def is_super_tiebreak(index: int, player1: int, player2: int) -> bool:
    """A third set reaching 10 is a match tiebreak, not a full set."""
    return index == SUPER_TIEBREAK_SET_INDEX and (
        player1 >= SUPER_TIEBREAK_MIN_SCORE or player2 >= SUPER_TIEBREAK_MIN_SCORE
    )


def match_totals(match: MatchRecord) -> Tuple[Pair, Pair]:
    """Return ``((p1_sets, p2_sets), (p1_games, p2_games))`` for a completed match.

    A walkover is worth a fixed 2-0 in sets and 12-0 in games to the winner,
    whatever set data was stored. A walkover whose winner matches neither
    player cannot be credited to anybody and counts as 0-0.
    """
    if match.result is None:
        return (0, 0), (0, 0)

    if match.result.score.walkover:
        winner = match.winner_side
        if winner == "player1":
            return (WALKOVER_SETS, 0), (WALKOVER_GAMES, 0)
        if winner == "player2":
            return (0, WALKOVER_SETS), (0, WALKOVER_GAMES)
        return (0, 0), (0, 0)

    p1_sets = p2_sets = p1_games = p2_games = 0
    for index, s in enumerate(match.result.score.sets):
        side = s.winner_side
        if side == "player1":
            p1_sets += 1
        elif side == "player2":
            p2_sets += 1

        if is_super_tiebreak(index, s.player1, s.player2):
            if side == "player1":
                p1_games += 1
            elif side == "player2":
                p2_games += 1
        else:
            p1_games += s.player1
            p2_games += s.player2

    return (p1_sets, p2_sets), (p1_games, p2_games)


def accumulate_match(
    stats: Dict[str, StatLine],
    match: MatchRecord,
    calculate_points: PointsFunction,
) -> None:
    """Add one match to the stat lines of whichever of its players are in ``stats``."""
    if not match.is_completed:
        return

    winner = match.winner_side
    if winner is None:
        logger.warning(
            "Match %s (league=%s season=%s round=%s) has winner %r which is "
            "neither %s nor %s; skipping win/loss credit",
            match.id,
            match.league_id,
            match.season,
            match.round,
            match.result.winner_id,
            match.player1,
            match.player2,
        )

    points = calculate_points(match)
    (p1_sets, p2_sets), (p1_games, p2_games) = match_totals(match)

    sides = (
        ("player1", match.player1, p1_sets, p2_sets, p1_games, p2_games),
        ("player2", match.player2, p2_sets, p1_sets, p2_games, p1_games),
    )
    for side, player_id, sets_won, sets_lost, games_won, games_lost in sides:
        line = stats.get(player_id)
        if line is None:
            continue
        line.points += points.for_side(side)
        line.matches_played += 1
        if winner is not None:
            if side == winner:
                line.matches_won += 1
            else:
                line.matches_lost += 1
        line.sets_won += sets_won
        line.sets_lost += sets_lost
        line.games_won += games_won
        line.games_lost += games_lost


def standings_sort_key(
    registration: PlayerRegistration,
    line: StatLine,
    *,
    include_status_sort: bool = True,
) -> tuple:
    return (
        status_priority(registration.status) if include_status_sort else 0,
        0 if line.has_played else 1,
        -line.points,
        -line.set_difference,
        -line.game_difference,
        collation_key(registration.name),
        registration.player_id,
    )


def _build_row(
    position: int, registration: PlayerRegistration, line: StatLine
) -> StandingsRow:
    return StandingsRow(
        position=position,
        player_id=registration.player_id,
        name=registration.name,
        level=registration.level,
        status=registration.status,
        points=line.points,
        matches_played=line.matches_played,
        matches_won=line.matches_won,
        matches_lost=line.matches_lost,
        sets_won=line.sets_won,
        sets_lost=line.sets_lost,
        games_won=line.games_won,
        games_lost=line.games_lost,
        set_difference=line.set_difference,
        game_difference=line.game_difference,
        win_percentage=percentage(line.matches_won, line.matches_played),
        set_percentage=percentage(line.sets_won, line.sets_won + line.sets_lost),
        elo_rating=registration.elo_rating,
        elo_change=elo_change(registration.elo_rating),
    )


def compute_standings(
    registrations: Iterable[PlayerRegistration],
    matches: Iterable[MatchRecord],
    calculate_points: Optional[PointsFunction] = None,
    *,
    include_status_sort: bool = True,
) -> List[StandingsRow]:
    """Return the ranked standings table for one league/season/level.

    Args:
        registrations: Players already filtered to the target league, season
            and level. Only these players get a row.
        matches: Completed matches of the same league and season. Anything
            not completed is ignored; players outside ``registrations`` are
            skipped.
        calculate_points: Scoring strategy. Defaults to the configured table.
        include_status_sort: Rank by registration status before performance.
    """
    if calculate_points is None:
        calculate_points = get_points_table()

    entries: Dict[str, PlayerRegistration] = {}
    stats: Dict[str, StatLine] = {}
    for registration in registrations:
        if registration.player_id in entries:
            logger.warning(
                "Duplicate registration for player %s; keeping the first one",
                registration.player_id,
            )
            continue
        entries[registration.player_id] = registration
        stats[registration.player_id] = StatLine()

    match_count = 0
    for match in matches:
        accumulate_match(stats, match, calculate_points)
        match_count += 1

    ordered = sorted(
        entries.values(),
        key=lambda reg: standings_sort_key(
            reg, stats[reg.player_id], include_status_sort=include_status_sort
        ),
    )
    rows = [
        _build_row(position, reg, stats[reg.player_id])
        for position, reg in enumerate(ordered, start=1)
    ]
    logger.debug(
        "Computed standings for %d players from %d matches", len(rows), match_count
    )
    return rows


def compute_playoff_standings(
    registrations: Iterable[PlayerRegistration],
    matches: Iterable[MatchRecord],
    calculate_points: Optional[PointsFunction] = None,
) -> List[StandingsRow]:
    """Standings used to seed the playoffs: status does not affect the order."""
    return compute_standings(
        registrations, matches, calculate_points, include_status_sort=False
    )
