"""League points tables.

A points table is any callable ``calculate_points(match) -> MatchPoints``.
The standings calculator receives one as a strategy so every league can
publish its own table without touching the aggregation code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional, Tuple

from .. import config
from ..exceptions import ScoringSystemNotFound
from ..schemas import MatchPoints, MatchRecord, Side

PointsFunction = Callable[[MatchRecord], MatchPoints]

NO_POINTS = MatchPoints()


def count_sets(match: MatchRecord) -> Tuple[int, int]:
    """Return ``(player1_sets, player2_sets)`` from the recorded set scores."""
    p1 = p2 = 0
    if match.result is None:
        return p1, p2
    for s in match.result.score.sets:
        side = s.winner_side
        if side == "player1":
            p1 += 1
        elif side == "player2":
            p2 += 1
    return p1, p2


def _split(winner_side: Side, winner_points: int, loser_points: int) -> MatchPoints:
    if winner_side == "player1":
        return MatchPoints(player1=winner_points, player2=loser_points)
    return MatchPoints(player1=loser_points, player2=winner_points)


class PointsTable(ABC):
    """Base class for scoring strategies.

    Matches that are not completed, have no recorded winner, or are playoff
    matches (unless ``playoff_points`` is set) award nothing.
    """

    name: str = ""

    def __init__(self, *, playoff_points: bool = False) -> None:
        self.playoff_points = playoff_points

    def __call__(self, match: MatchRecord) -> MatchPoints:
        if not match.is_completed or match.result.winner_id is None:
            return NO_POINTS
        if match.match_type == "playoff" and not self.playoff_points:
            return NO_POINTS
        return self.award(match)

    @abstractmethod
    def award(self, match: MatchRecord) -> MatchPoints:
        """Return the points for a completed, scoreable match."""


class SetBasedPoints(PointsTable):
    """Points depend on the set score of the match.

    Default table: win 2-0 = 3, win 2-1 = 2, lose 1-2 = 1, lose 0-2 = 0.
    A walkover gives the winner 2 points and the loser 0. Set scores missing
    from the table award 0.
    """

    name = "set_based"

    DEFAULT_TABLE: Mapping[Tuple[int, int], int] = {
        (2, 0): 3,
        (2, 1): 2,
        (1, 2): 1,
        (0, 2): 0,
    }

    def __init__(
        self,
        table: Optional[Mapping[Tuple[int, int], int]] = None,
        *,
        walkover_win: int = 2,
        walkover_loss: int = 0,
        playoff_points: bool = False,
    ) -> None:
        super().__init__(playoff_points=playoff_points)
        self.table = dict(self.DEFAULT_TABLE if table is None else table)
        self.walkover_win = walkover_win
        self.walkover_loss = walkover_loss

    def award(self, match: MatchRecord) -> MatchPoints:
        if match.is_walkover:
            winner = match.winner_side
            if winner is None:
                return NO_POINTS
            return _split(winner, self.walkover_win, self.walkover_loss)

        p1_sets, p2_sets = count_sets(match)
        return MatchPoints(
            player1=self.table.get((p1_sets, p2_sets), 0),
            player2=self.table.get((p2_sets, p1_sets), 0),
        )


class WinLossPoints(PointsTable):
    """Flat table: a fixed number of points per win and per loss."""

    name = "win_loss"

    def __init__(
        self,
        win: int = 3,
        loss: int = 0,
        *,
        walkover_win: Optional[int] = None,
        walkover_loss: Optional[int] = None,
        playoff_points: bool = False,
    ) -> None:
        if win <= loss:
            raise ValueError("a win must be worth more points than a loss")
        super().__init__(playoff_points=playoff_points)
        self.win = win
        self.loss = loss
        self.walkover_win = win if walkover_win is None else walkover_win
        self.walkover_loss = loss if walkover_loss is None else walkover_loss

    def award(self, match: MatchRecord) -> MatchPoints:
        winner = match.winner_side
        if winner is None:
            return NO_POINTS
        if match.is_walkover:
            return _split(winner, self.walkover_win, self.walkover_loss)
        return _split(winner, self.win, self.loss)


POINTS_TABLES: Dict[str, PointsTable] = {
    "set_based": SetBasedPoints(),
    "win_3_loss_1": WinLossPoints(win=3, loss=1),
    "win_3_loss_0": WinLossPoints(win=3, loss=0),
    "win_2_loss_0": WinLossPoints(win=2, loss=0),
}


def get_points_table(name: Optional[str] = None) -> PointsTable:
    """Return the registered table ``name`` (defaults to ``SCORING_SYSTEM``)."""
    key = config.canon_scoring_system(name) if name is not None else config.SCORING_SYSTEM
    try:
        return POINTS_TABLES[key]
    except KeyError:
        raise ScoringSystemNotFound(key) from None


def points_for_player(
    match: MatchRecord, player_id: str, calculate_points: PointsFunction
) -> int:
    """Return the points ``player_id`` earned in ``match`` (0 if not in it)."""
    side = match.side_of(player_id)
    if side is None:
        return 0
    return calculate_points(match).for_side(side)
