from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel

from leaguestats.standings import StandingRow
from leaguestats.stats import TeamSummary


class TeamSummaryResponse(BaseModel):
    team_id: str
    wins: int
    losses: int
    draws: int
    total_matches: int
    skipped_matches: int
    total_completed_matches: int
    win_rate: float
    tournament_points: int
    total_runs_scored: int
    total_runs_conceded: int
    total_wickets_taken: int
    total_wickets_lost: int
    total_balls_faced: int
    total_balls_bowled: int
    nrr_runs_scored: int
    nrr_runs_conceded: int
    nrr_excluded_matches: int
    has_nrr_data: bool
    net_run_rate: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: TeamSummary) -> "TeamSummaryResponse":
        return cls(**asdict(summary), total_completed_matches=summary.total_completed_matches)


class StandingRowResponse(BaseModel):
    position: int
    team_id: str
    team_name: str
    played: int
    wins: int
    losses: int
    draws: int
    no_results: int
    points: int
    net_run_rate: Optional[float] = None

    @classmethod
    def from_row(cls, row: StandingRow) -> "StandingRowResponse":
        return cls(**asdict(row))
