from typing import Optional

from ..schemas import ELO_BASELINE
from ..score_utils import round_half_up

K_FACTOR = 32

INITIAL_ELO_BY_LEVEL: dict[str, int] = {
    "beginner": 1100,
    "intermediate": 1200,
    "advanced": 1300,
}


def expected_score(rating: float, opponent_rating: float) -> float:
    """Return the expected score of ``rating`` against ``opponent_rating``."""
    return 1 / (1 + 10 ** ((opponent_rating - rating) / 400))


def calculate_elo_change(
    rating_a: Optional[int],
    rating_b: Optional[int],
    a_won: bool,
    k: float = K_FACTOR,
) -> int:
    """Return the rounded rating change for player A after one match.

    Player B's change is the negation, so the exchange is zero-sum. Missing
    ratings count as the 1200 baseline.
    """
    a = ELO_BASELINE if rating_a is None else rating_a
    b = ELO_BASELINE if rating_b is None else rating_b
    actual = 1.0 if a_won else 0.0
    return round_half_up(k * (actual - expected_score(a, b)))


def initial_elo_for_level(level: Optional[str]) -> int:
    if not level:
        return ELO_BASELINE
    return INITIAL_ELO_BY_LEVEL.get(level.strip().lower(), ELO_BASELINE)


def elo_change(rating: Optional[int]) -> int:
    """Return how far ``rating`` has moved from the starting baseline."""
    if rating is None:
        return 0
    return rating - ELO_BASELINE
