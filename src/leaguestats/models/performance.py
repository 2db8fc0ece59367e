"""Per-match player performance records."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from leaguestats.models.base import LeagueModel
from leaguestats.overs import overs_to_balls

AwardTag = Literal["man-of-match", "best-batsman", "best-bowler", "best-fielder"]
MatchResult = Literal["won", "lost", "tied", "drawn", "no-result", "abandoned"]

_NOT_OUT = {"not out", "not-out", "retired hurt", "dnb"}


class BattingStats(LeagueModel):
    runs: int = Field(default=0, ge=0)
    balls: int = Field(default=0, ge=0)
    fours: int = Field(default=0, ge=0)
    sixes: int = Field(default=0, ge=0)
    strike_rate: Optional[float] = Field(default=None, ge=0.0)
    position: Optional[int] = Field(default=None, ge=1, le=11)
    is_out: Optional[bool] = None
    dismissal_type: Optional[str] = None
    bowler_out: Optional[str] = None
    fielder_out: Optional[str] = None

    @property
    def dismissed(self) -> bool:
        """Explicit ``is_out`` wins; otherwise infer it from the dismissal type."""

        if self.is_out is not None:
            return self.is_out
        if not self.dismissal_type:
            return False
        return self.dismissal_type.strip().lower() not in _NOT_OUT


class BowlingStats(LeagueModel):
    overs: float = Field(default=0.0, ge=0.0)
    maidens: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    wickets: int = Field(default=0, ge=0, le=10)
    economy: Optional[float] = Field(default=None, ge=0.0)
    wides: int = Field(default=0, ge=0)
    no_balls: int = Field(default=0, ge=0)

    @field_validator("overs")
    @classmethod
    def _legal_overs(cls, value: float) -> float:
        overs_to_balls(value)
        return value

    @property
    def balls(self) -> int:
        return overs_to_balls(self.overs)


class FieldingStats(LeagueModel):
    catches: int = Field(default=0, ge=0)
    run_outs: int = Field(default=0, ge=0)
    stumpings: int = Field(default=0, ge=0)


class PlayerPerformance(LeagueModel):
    """One player's contribution to one match; unique per (match, player)."""

    id: Optional[str] = None
    player_id: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    match_id: str = Field(..., min_length=1)
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    opposition: str = ""
    venue: Optional[str] = None
    match_date: Optional[datetime] = None
    match_format: Optional[str] = None
    match_result: Optional[MatchResult] = None
    batting_stats: Optional[BattingStats] = None
    bowling_stats: Optional[BowlingStats] = None
    fielding_stats: Optional[FieldingStats] = None
    awards: List[AwardTag] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("awards")
    @classmethod
    def _unique_awards(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @property
    def key(self) -> tuple[str, str]:
        return self.match_id, self.player_id
