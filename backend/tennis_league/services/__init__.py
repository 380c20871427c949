"""Internal application services (pure helpers, no I/O of their own)."""

from .validation import (
    ValidationError,
    coerce_games,
    parse_matches,
    parse_registrations,
    require_completed,
)
from .rating import calculate_elo_change, elo_change, initial_elo_for_level
from .standings import (
    accumulate_match,
    compute_playoff_standings,
    compute_standings,
    match_totals,
    standings_sort_key,
    status_priority,
)
from .league import (
    InMemoryLeagueRepository,
    MatchLookup,
    RegistrationLookup,
    current_round,
    load_league_standings,
    summarize,
)

__all__ = [
    "ValidationError",
    "coerce_games",
    "parse_matches",
    "parse_registrations",
    "require_completed",
    "calculate_elo_change",
    "elo_change",
    "initial_elo_for_level",
    "accumulate_match",
    "compute_playoff_standings",
    "compute_standings",
    "match_totals",
    "standings_sort_key",
    "status_priority",
    "InMemoryLeagueRepository",
    "MatchLookup",
    "RegistrationLookup",
    "current_round",
    "load_league_standings",
    "summarize",
]
