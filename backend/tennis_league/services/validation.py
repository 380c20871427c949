import logging
from typing import Any, Iterable, List, Mapping

import pydantic

from ..schemas import MatchRecord, PlayerRegistration
from ..score_utils import coerce_games

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when a record does not satisfy a strict requirement."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_matches(payloads: Iterable[Mapping[str, Any]]) -> List[MatchRecord]:
    """Validate raw match documents, skipping the ones that cannot be used.

    Malformed set scores are normalised to 0 by :class:`MatchRecord` itself;
    only structurally broken records (missing players, a player facing
    themselves, a completed match without a result) are dropped.
    """
    matches: List[MatchRecord] = []
    for index, payload in enumerate(payloads, start=1):
        try:
            matches.append(MatchRecord.model_validate(payload))
        except pydantic.ValidationError as exc:
            ident = None
            if isinstance(payload, Mapping):
                ident = payload.get("_id") or payload.get("id")
            logger.warning(
                "Skipping match #%d (%s): %s", index, ident or "no id", _describe(exc)
            )
    return matches


def parse_registrations(
    payloads: Iterable[Mapping[str, Any]],
) -> List[PlayerRegistration]:
    """Validate raw player registration documents, skipping unusable ones."""
    registrations: List[PlayerRegistration] = []
    for index, payload in enumerate(payloads, start=1):
        try:
            registrations.append(PlayerRegistration.model_validate(payload))
        except pydantic.ValidationError as exc:
            logger.warning(
                "Skipping registration #%d: %s", index, _describe(exc)
            )
    return registrations


def require_completed(match: MatchRecord) -> MatchRecord:
    """Return ``match`` if it has a usable result, raise otherwise."""
    if not match.is_completed:
        raise ValidationError(f"Match {match.id or '?'} is not completed.")
    if match.winner_side is None:
        raise ValidationError(
            f"Match {match.id or '?'} winner must be one of the match players."
        )
    return match


__all__ = [
    "ValidationError",
    "coerce_games",
    "parse_matches",
    "parse_registrations",
    "require_completed",
]
