import math
from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .score_utils import coerce_games, round_half_up

ELO_BASELINE = 1200

MatchStatus = Literal["scheduled", "completed", "cancelled", "postponed"]
MatchType = Literal["regular", "playoff"]
Side = Literal["player1", "player2"]


def _as_id(value: Any) -> Any:
    """Return document ids (ObjectId-like, ints) as plain strings."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, dict):
        # populated reference, e.g. {"_id": "...", "name": "..."}
        return _as_id(value.get("_id", value.get("id")))
    return str(value)


def _rename(data: dict, source: str, target: str) -> None:
    if source in data and target not in data:
        data[target] = data.pop(source)


class SetScore(BaseModel):
    """Games won by each side in one set."""

    player1: int = 0
    player2: int = 0

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            padded = list(data) + [0, 0]
            return {"player1": padded[0], "player2": padded[1]}
        if isinstance(data, dict):
            data = dict(data)
            _rename(data, "player1Games", "player1")
            _rename(data, "player2Games", "player2")
        return data

    @field_validator("player1", "player2", mode="before")
    @classmethod
    def _coerce_games(cls, value: Any) -> int:
        return coerce_games(value)

    @property
    def winner_side(self) -> Optional[Side]:
        if self.player1 > self.player2:
            return "player1"
        if self.player2 > self.player1:
            return "player2"
        return None


class MatchScore(BaseModel):
    sets: Tuple[SetScore, ...] = ()
    walkover: bool = False
    retired_player: Optional[str] = Field(default=None, alias="retiredPlayer")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("sets", mode="before")
    @classmethod
    def _sets_or_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("walkover", mode="before")
    @classmethod
    def _walkover_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes"}
        return bool(value)

    @field_validator("retired_player", mode="before")
    @classmethod
    def _retired_id(cls, value: Any) -> Any:
        return _as_id(value)


class MatchResult(BaseModel):
    winner_id: Optional[str] = Field(default=None, alias="winnerId")
    score: MatchScore = Field(default_factory=MatchScore)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_document_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            _rename(data, "winner", "winnerId")
            if data.get("score") is None:
                data.pop("score", None)
        return data

    @field_validator("winner_id", mode="before")
    @classmethod
    def _winner_id(cls, value: Any) -> Any:
        return _as_id(value)


class MatchRecord(BaseModel):
    """A league match as stored by the surrounding application."""

    id: Optional[str] = None
    league_id: str = Field(alias="leagueId")
    season: str
    round: int = Field(ge=1)
    status: MatchStatus = "scheduled"
    match_type: MatchType = Field(default="regular", alias="matchType")
    players: Tuple[str, str]
    result: Optional[MatchResult] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_document_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        _rename(data, "_id", "id")
        _rename(data, "league", "leagueId")
        players = data.get("players")
        if isinstance(players, dict):
            data["players"] = (players.get("player1"), players.get("player2"))
        return data

    @field_validator("id", "league_id", "season", mode="before")
    @classmethod
    def _plain_ids(cls, value: Any) -> Any:
        return _as_id(value)

    @field_validator("players", mode="before")
    @classmethod
    def _player_ids(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(_as_id(v) for v in value)
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "MatchRecord":
        if self.players[0] == self.players[1]:
            raise ValueError("a player cannot play against themselves")
        if self.status == "completed":
            if self.result is None:
                raise ValueError("completed matches must have a result")
            score = self.result.score
            if not score.sets and not score.walkover:
                raise ValueError(
                    "completed matches need at least one set or a walkover"
                )
        return self

    @property
    def player1(self) -> str:
        return self.players[0]

    @property
    def player2(self) -> str:
        return self.players[1]

    @property
    def is_completed(self) -> bool:
        return self.status == "completed" and self.result is not None

    @property
    def is_walkover(self) -> bool:
        return self.result is not None and self.result.score.walkover

    @property
    def winner_side(self) -> Optional[Side]:
        """Side of the recorded winner, ``None`` if it matches neither player."""
        if self.result is None or self.result.winner_id is None:
            return None
        return self.side_of(self.result.winner_id)

    def has_player(self, player_id: str) -> bool:
        return player_id in self.players

    def side_of(self, player_id: str) -> Optional[Side]:
        if player_id == self.players[0]:
            return "player1"
        if player_id == self.players[1]:
            return "player2"
        return None

    def opponent_of(self, player_id: str) -> Optional[str]:
        if player_id == self.players[0]:
            return self.players[1]
        if player_id == self.players[1]:
            return self.players[0]
        return None

    def score_display(self) -> str:
        if self.result is None:
            return ""
        if self.result.score.walkover and not self.result.score.sets:
            return "W/O"
        return ", ".join(
            f"{s.player1}-{s.player2}" for s in self.result.score.sets
        )


class PlayerRegistration(BaseModel):
    """A player's registration in one league/season/level."""

    player_id: str = Field(alias="playerId")
    name: str = ""
    level: Optional[str] = None
    status: Optional[str] = None
    elo_rating: int = Field(default=ELO_BASELINE, alias="eloRating")
    league_id: Optional[str] = Field(default=None, alias="leagueId")
    season: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_document_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        _rename(data, "_id", "playerId")
        _rename(data, "id", "playerId")
        _rename(data, "league", "leagueId")
        stats = data.get("stats")
        if "eloRating" not in data and "elo_rating" not in data and isinstance(stats, dict):
            data["eloRating"] = stats.get("eloRating")
        return data

    @field_validator("player_id", "league_id", "season", mode="before")
    @classmethod
    def _plain_ids(cls, value: Any) -> Any:
        return _as_id(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value).strip().lower() or None

    @field_validator("elo_rating", mode="before")
    @classmethod
    def _elo_rating(cls, value: Any) -> int:
        # unset, zero or unreadable ratings start from the baseline
        if value is None or isinstance(value, bool):
            return ELO_BASELINE
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return ELO_BASELINE
        if isinstance(value, float):
            if not math.isfinite(value):
                return ELO_BASELINE
            value = round_half_up(value)
        if not isinstance(value, int) or value == 0:
            return ELO_BASELINE
        return value


class MatchPoints(BaseModel):
    """League points awarded to each side of one match."""

    player1: int = 0
    player2: int = 0

    model_config = ConfigDict(frozen=True)

    def for_side(self, side: Side) -> int:
        return self.player1 if side == "player1" else self.player2


class StatLine(BaseModel):
    """Per-player aggregates for a standings request. Never persisted."""

    points: int = 0
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0

    @property
    def has_played(self) -> bool:
        return self.matches_played > 0

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def game_difference(self) -> int:
        return self.games_won - self.games_lost


class StandingsRow(BaseModel):
    position: int
    player_id: str
    name: str
    level: Optional[str] = None
    status: Optional[str] = None
    points: int
    matches_played: int
    matches_won: int
    matches_lost: int
    sets_won: int
    sets_lost: int
    games_won: int
    games_lost: int
    set_difference: int
    game_difference: int
    win_percentage: int
    set_percentage: int
    elo_rating: int
    elo_change: int

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


class LeagueStandings(BaseModel):
    league_id: str
    season: Optional[str] = None
    level: Optional[str] = None
    standings: List[StandingsRow]
    total_players: int
    current_round: int
    season_fallback_used: bool = False

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )
