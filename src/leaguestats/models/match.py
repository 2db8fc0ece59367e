"""Match payloads consumed read-only by the statistics engine."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic.config import ConfigDict

from leaguestats.models.base import LeagueModel
from leaguestats.overs import overs_to_balls


class _OpenModel(LeagueModel):
    # Scorecards carry many display-only keys; keep them so rewrites round-trip.
    model_config = ConfigDict(extra="allow")


class InningsPlayer(_OpenModel):
    player_id: Optional[str] = None
    player_name: Optional[str] = None


class Innings(_OpenModel):
    batting_team_id: Optional[str] = None
    total_runs: int = Field(default=0, ge=0)
    total_wickets: int = Field(default=0, ge=0)
    total_overs: Optional[float] = Field(default=None, ge=0.0)
    batsmen: List[InningsPlayer] = Field(default_factory=list)
    bowlers: List[InningsPlayer] = Field(default_factory=list)

    @field_validator("total_overs")
    @classmethod
    def _legal_overs(cls, value: Optional[float]) -> Optional[float]:
        if value is not None:
            overs_to_balls(value)
        return value

    @property
    def balls(self) -> int:
        if self.total_overs is None:
            return 0
        return overs_to_balls(self.total_overs)


class Scorecard(_OpenModel):
    team1_innings: List[Innings] = Field(default_factory=list)
    team2_innings: List[Innings] = Field(default_factory=list)

    def all_innings(self) -> List[Innings]:
        return [*self.team1_innings, *self.team2_innings]


class ResultSummary(_OpenModel):
    result_type: Optional[str] = None
    winner_id: Optional[str] = None


class MatchData(_OpenModel):
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    team1_players: List[str] = Field(default_factory=list)
    team2_players: List[str] = Field(default_factory=list)
    scorecard: Optional[Scorecard] = None
    result_summary: Optional[ResultSummary] = None


class Match(LeagueModel):
    id: str = Field(..., min_length=1)
    sport: str = "cricket"
    status: str = "completed"
    match_format: Optional[str] = None
    venue: Optional[str] = None
    match_date: Optional[datetime] = None
    match_data: MatchData = Field(default_factory=MatchData)
    created_at: Optional[datetime] = None

    @property
    def team_ids(self) -> tuple[Optional[str], Optional[str]]:
        return self.match_data.team1_id, self.match_data.team2_id


class MatchRosterEntry(LeagueModel):
    id: str = Field(..., min_length=1)
    match_id: str
    team: str
    player_id: Optional[str] = None
    player_name: str
    player_email: Optional[str] = None
    role: Optional[str] = None
    position: int = 0
    is_registered_user: bool = False
    user_id: Optional[str] = None
