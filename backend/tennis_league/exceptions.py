from typing import Optional


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        title: str,
        *,
        code: str,
        detail: Optional[str] = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code

    def to_problem(self) -> dict[str, Optional[str]]:
        """Return an RFC 7807 style payload the caller can render."""
        return {
            "type": self.type,
            "title": self.title,
            "detail": self.detail,
            "code": self.code,
        }


class ScoringSystemNotFound(DomainException):
    def __init__(self, name: str) -> None:
        super().__init__(
            title="Scoring system not found",
            detail=f"scoring system '{name}' is not configured",
            code="scoring_system_not_found",
        )


class LeagueDataUnavailable(DomainException):
    def __init__(self, league_id: str, season: Optional[str], reason: str) -> None:
        label = f"{league_id}/{season}" if season else league_id
        super().__init__(
            title="League data unavailable",
            detail=f"could not load data for league '{label}': {reason}",
            code="league_data_unavailable",
        )
