"""Canonical player, career and account models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import Field, field_validator

from leaguestats.models.base import LeagueModel
from leaguestats.overs import balls_to_overs

PlayerRole = Literal[
    "batsman",
    "bowler",
    "all-rounder",
    "wicket-keeper",
    "goalkeeper",
    "defender",
    "midfielder",
    "forward",
]
BattingStyle = Literal["right-handed", "left-handed"]
BowlingStyle = Literal[
    "right-arm-fast",
    "left-arm-fast",
    "right-arm-medium",
    "left-arm-medium",
    "right-arm-spin",
    "left-arm-spin",
    "leg-spin",
    "off-spin",
]


def parse_figures(figures: Optional[str]) -> Optional[Tuple[int, int]]:
    """Split bowling figures such as ``"4/25"`` into ``(wickets, runs)``."""

    if not figures:
        return None
    wickets, _, runs = figures.partition("/")
    try:
        return int(wickets), int(runs)
    except ValueError:
        return None


def better_figures(current: Optional[str], candidate: Optional[str]) -> Optional[str]:
    """More wickets wins; equal wickets are broken by fewer runs conceded."""

    current_parsed = parse_figures(current)
    candidate_parsed = parse_figures(candidate)
    if candidate_parsed is None:
        return current
    if current_parsed is None:
        return candidate
    if candidate_parsed[0] > current_parsed[0]:
        return candidate
    if candidate_parsed[0] == current_parsed[0] and candidate_parsed[1] < current_parsed[1]:
        return candidate
    return current


class CareerStats(LeagueModel):
    """Cumulative counters; rates are derived on read and never stored."""

    total_runs: int = Field(default=0, ge=0)
    total_balls_faced: int = Field(default=0, ge=0)
    total_fours: int = Field(default=0, ge=0)
    total_sixes: int = Field(default=0, ge=0)
    highest_score: int = Field(default=0, ge=0)
    centuries: int = Field(default=0, ge=0)
    half_centuries: int = Field(default=0, ge=0)
    innings: int = Field(default=0, ge=0)
    dismissals: int = Field(default=0, ge=0)

    balls_bowled: int = Field(default=0, ge=0)
    total_runs_conceded: int = Field(default=0, ge=0)
    total_wickets: int = Field(default=0, ge=0)
    total_maidens: int = Field(default=0, ge=0)
    best_bowling_figures: Optional[str] = None
    five_wicket_hauls: int = Field(default=0, ge=0)

    catches: int = Field(default=0, ge=0)
    run_outs: int = Field(default=0, ge=0)
    stumpings: int = Field(default=0, ge=0)

    total_matches: int = Field(default=0, ge=0)
    matches_won: int = Field(default=0, ge=0)

    man_of_the_match_awards: int = Field(default=0, ge=0)
    best_batsman_awards: int = Field(default=0, ge=0)
    best_bowler_awards: int = Field(default=0, ge=0)
    best_fielder_awards: int = Field(default=0, ge=0)

    @property
    def overs_bowled(self) -> float:
        return balls_to_overs(self.balls_bowled)

    @property
    def batting_average(self) -> Optional[float]:
        if self.dismissals == 0:
            return None
        return self.total_runs / self.dismissals

    @property
    def strike_rate(self) -> Optional[float]:
        if self.total_balls_faced == 0:
            return None
        return self.total_runs / self.total_balls_faced * 100

    @property
    def bowling_average(self) -> Optional[float]:
        if self.total_wickets == 0:
            return None
        return self.total_runs_conceded / self.total_wickets

    @property
    def economy(self) -> Optional[float]:
        if self.balls_bowled == 0:
            return None
        return self.total_runs_conceded / (self.balls_bowled / 6)


class MergeHistoryEntry(LeagueModel):
    timestamp: datetime
    source_player_id: Optional[str] = None
    merged_by: Optional[str] = None
    merged_fields: List[str] = Field(default_factory=list)
    career_stats_merged: bool = False


class Player(LeagueModel):
    """A rostered or guest player; ``email`` is the identity key."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    user_id: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    role: Optional[PlayerRole] = None
    batting_style: Optional[BattingStyle] = None
    bowling_style: Optional[BowlingStyle] = None
    jersey_number: Optional[int] = None
    is_guest: bool = False
    career_stats: CareerStats = Field(default_factory=CareerStats)
    merged_from_player_ids: List[str] = Field(default_factory=list)
    merge_history: List[MergeHistoryEntry] = Field(default_factory=list)
    version: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class PlayerCandidate(LeagueModel):
    """Player data submitted for creation, before identity resolution."""

    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    user_id: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    role: Optional[PlayerRole] = None
    batting_style: Optional[BattingStyle] = None
    bowling_style: Optional[BowlingStyle] = None
    jersey_number: Optional[int] = None
    is_guest: bool = False

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class User(LeagueModel):
    """Registered account; only the fields identity matching needs."""

    id: str = Field(..., min_length=1)
    email: str
    name: Optional[str] = None
