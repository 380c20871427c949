#!/usr/bin/env python3
"""Admin helper to compute league standings from a JSON export.

The input file holds the documents exported from the league database::

    {"registrations": [...], "matches": [...]}

Example::

    python backend/scripts/compute_standings.py export.json \\
        --league 65f0c... --season "Verano 2025" --level intermediate

Without ``--league`` the standings are computed over every record in the
file, which is handy for exports that were already filtered.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from tennis_league import config
from tennis_league.exceptions import DomainException
from tennis_league.schemas import LeagueStandings
from tennis_league.scoring import get_points_table
from tennis_league.services import (
    InMemoryLeagueRepository,
    load_league_standings,
    parse_matches,
    parse_registrations,
    summarize,
)
from tennis_league.utils.sentry import init_sentry

logger = logging.getLogger("compute_standings")

COLUMNS = (
    ("#", "position", 3),
    ("Player", "name", 24),
    ("Status", "status", 10),
    ("Pts", "points", 4),
    ("MP", "matches_played", 3),
    ("W", "matches_won", 3),
    ("L", "matches_lost", 3),
    ("Sets", "sets", 7),
    ("Games", "games", 7),
    ("Win%", "win_percentage", 5),
    ("ELO", "elo_change", 5),
)


def _load_export(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _cell(row, attr: str) -> str:
    if attr == "sets":
        return f"{row.sets_won}-{row.sets_lost}"
    if attr == "games":
        return f"{row.games_won}-{row.games_lost}"
    if attr == "elo_change":
        return f"{row.elo_change:+d}"
    value = getattr(row, attr)
    return "" if value is None else str(value)


def render_table(result: LeagueStandings) -> str:
    header = " ".join(title.ljust(width) for title, _, width in COLUMNS)
    lines = [
        f"League {result.league_id} | season {result.season or '-'} | "
        f"round {result.current_round} | {result.total_players} players",
        header,
        "-" * len(header),
    ]
    for row in result.standings:
        lines.append(
            " ".join(_cell(row, attr)[:width].ljust(width) for _, attr, width in COLUMNS)
        )
    return "\n".join(lines)


async def build_standings(args: argparse.Namespace) -> LeagueStandings:
    export = _load_export(Path(args.export))
    registrations = parse_registrations(export.get("registrations") or [])
    matches = parse_matches(export.get("matches") or [])
    calculate_points = get_points_table(args.scoring)
    include_status_sort = not args.playoff

    if args.league is None:
        registrations = [
            r
            for r in registrations
            if (args.level is None or r.level == args.level)
            and (args.season is None or r.season in (None, args.season))
        ]
        completed = [
            m
            for m in matches
            if m.is_completed and (args.season is None or m.season == args.season)
        ]
        return summarize(
            "all",
            args.season,
            registrations,
            completed,
            calculate_points,
            level=args.level,
            include_status_sort=include_status_sort,
        )

    repository = InMemoryLeagueRepository(registrations, matches)
    return await load_league_standings(
        repository,
        repository,
        args.league,
        args.season,
        args.level,
        calculate_points,
        include_status_sort=include_status_sort,
    )


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute league standings from a JSON export of matches and registrations."
    )
    parser.add_argument("export", help="Path to the JSON export file")
    parser.add_argument("--league", help="League id to filter on")
    parser.add_argument(
        "--season",
        default=config.DEFAULT_SEASON,
        help="Season label to filter on (defaults to DEFAULT_SEASON)",
    )
    parser.add_argument("--level", help="Only include registrations of this level")
    parser.add_argument(
        "--scoring",
        default=config.SCORING_SYSTEM,
        help="Points table name (defaults to SCORING_SYSTEM)",
    )
    parser.add_argument(
        "--playoff",
        action="store_true",
        help="Ignore registration status when ordering (playoff seeding)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the standings as JSON instead of a text table",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    init_sentry()

    try:
        result = asyncio.run(build_standings(args))
    except DomainException as exc:
        logger.error("%s: %s", exc.title, exc.detail)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", args.export, exc)
        return 1

    if args.json:
        print(json.dumps(result.model_dump(by_alias=True), indent=2))
    else:
        print(render_table(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
