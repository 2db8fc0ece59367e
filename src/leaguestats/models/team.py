"""Team records and their persisted tournament figures."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from leaguestats.models.base import LeagueModel


class Team(LeagueModel):
    id: str = Field(..., min_length=1)
    name: str
    sport: str = "cricket"
    player_ids: List[str] = Field(default_factory=list)
    matches_won: int = Field(default=0, ge=0)
    matches_lost: int = Field(default=0, ge=0)
    matches_drawn: int = Field(default=0, ge=0)
    total_runs_scored: int = Field(default=0, ge=0)
    total_runs_conceded: int = Field(default=0, ge=0)
    total_wickets_taken: int = Field(default=0, ge=0)
    total_wickets_lost: int = Field(default=0, ge=0)
    matches_no_result: int = Field(default=0, ge=0)
    tournament_points: int = Field(default=0, ge=0)
    # Net run rate inputs, taken only from matches with overs on every innings.
    total_balls_faced: int = Field(default=0, ge=0)
    total_balls_bowled: int = Field(default=0, ge=0)
    nrr_runs_scored: int = Field(default=0, ge=0)
    nrr_runs_conceded: int = Field(default=0, ge=0)
    nrr_excluded_matches: int = Field(default=0, ge=0)
    # None until both batting and bowling balls exist.
    net_run_rate: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
