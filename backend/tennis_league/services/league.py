"""Caller-side standings orchestration.

Data access stays behind two small lookup protocols so the surrounding
application can plug in whatever store it uses. This module owns the
retry policy for seasons whose registrations were stored without a season
label, and the summary fields the standings page shows next to the table.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from .. import config
from ..exceptions import DomainException, LeagueDataUnavailable
from ..schemas import LeagueStandings, MatchRecord, PlayerRegistration
from ..scoring.points import PointsFunction
from .standings import compute_standings

logger = logging.getLogger(__name__)


class MatchLookup(Protocol):
    async def find_completed_matches(
        self, league_id: str, season: Optional[str]
    ) -> Sequence[MatchRecord]:
        """Return completed matches of a league; ``season=None`` means any season."""
        ...


class RegistrationLookup(Protocol):
    async def find_registrations(
        self, league_id: str, season: Optional[str], level: Optional[str] = None
    ) -> Sequence[PlayerRegistration]:
        """Return registrations of a league; ``season=None`` means any season."""
        ...


def current_round(matches: Iterable[MatchRecord]) -> int:
    return max((m.round for m in matches), default=0)


def summarize(
    league_id: str,
    season: Optional[str],
    registrations: Sequence[PlayerRegistration],
    matches: Sequence[MatchRecord],
    calculate_points: Optional[PointsFunction] = None,
    *,
    level: Optional[str] = None,
    include_status_sort: bool = True,
    season_fallback_used: bool = False,
) -> LeagueStandings:
    """Build the standings envelope from already-fetched records."""
    rows = compute_standings(
        registrations,
        matches,
        calculate_points,
        include_status_sort=include_status_sort,
    )
    return LeagueStandings(
        league_id=league_id,
        season=season,
        level=level,
        standings=rows,
        total_players=len(rows),
        current_round=current_round(matches),
        season_fallback_used=season_fallback_used,
    )


async def load_league_standings(
    match_lookup: MatchLookup,
    registration_lookup: RegistrationLookup,
    league_id: str,
    season: Optional[str] = None,
    level: Optional[str] = None,
    calculate_points: Optional[PointsFunction] = None,
    *,
    fallback_to_any_season: Optional[bool] = None,
    include_status_sort: bool = True,
) -> LeagueStandings:
    """Fetch a league's records and compute its standings.

    When the exact season has no registrations the registration lookup is
    retried without a season filter (controlled by ``SEASON_FALLBACK``).
    Matches are always read for the requested season.

    Raises:
        LeagueDataUnavailable: a lookup failed.
    """
    if season is None:
        season = config.DEFAULT_SEASON
    if fallback_to_any_season is None:
        fallback_to_any_season = config.SEASON_FALLBACK

    fallback_used = False
    try:
        registrations = list(
            await registration_lookup.find_registrations(league_id, season, level)
        )
        if not registrations and season is not None and fallback_to_any_season:
            logger.info(
                "No registrations for league %s season %r; retrying without a season filter",
                league_id,
                season,
            )
            registrations = list(
                await registration_lookup.find_registrations(league_id, None, level)
            )
            fallback_used = True
        matches: List[MatchRecord] = list(
            await match_lookup.find_completed_matches(league_id, season)
        )
    except DomainException:
        raise
    except Exception as exc:
        logger.error(
            "Failed to load standings data for league %s season %r",
            league_id,
            season,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        raise LeagueDataUnavailable(league_id, season, str(exc)) from exc

    return summarize(
        league_id,
        season,
        registrations,
        matches,
        calculate_points,
        level=level,
        include_status_sort=include_status_sort,
        season_fallback_used=fallback_used,
    )


class InMemoryLeagueRepository:
    """Both lookups over in-memory records, e.g. a JSON export."""

    def __init__(
        self,
        registrations: Iterable[PlayerRegistration] = (),
        matches: Iterable[MatchRecord] = (),
    ) -> None:
        self._registrations = tuple(registrations)
        self._matches = tuple(matches)

    async def find_completed_matches(
        self, league_id: str, season: Optional[str]
    ) -> List[MatchRecord]:
        return [
            m
            for m in self._matches
            if m.league_id == league_id
            and m.is_completed
            and (season is None or m.season == season)
        ]

    async def find_registrations(
        self, league_id: str, season: Optional[str], level: Optional[str] = None
    ) -> List[PlayerRegistration]:
        return [
            r
            for r in self._registrations
            if r.league_id == league_id
            and (season is None or r.season == season)
            and (level is None or r.level == level)
        ]
