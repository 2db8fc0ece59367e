from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from leaguestats.models import CareerStats, Player, PlayerCandidate


class CareerStatsResponse(BaseModel):
    counters: dict[str, Any]
    overs_bowled: float
    batting_average: Optional[float] = None
    strike_rate: Optional[float] = None
    bowling_average: Optional[float] = None
    economy: Optional[float] = None

    @classmethod
    def from_stats(cls, stats: CareerStats) -> "CareerStatsResponse":
        return cls(
            counters=stats.model_dump(),
            overs_bowled=stats.overs_bowled,
            batting_average=stats.batting_average,
            strike_rate=stats.strike_rate,
            bowling_average=stats.bowling_average,
            economy=stats.economy,
        )


class PlayerResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    user_id: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    role: Optional[str] = None
    batting_style: Optional[str] = None
    bowling_style: Optional[str] = None
    jersey_number: Optional[int] = None
    is_guest: bool = False
    career_stats: CareerStatsResponse
    merged_from_player_ids: list[str] = Field(default_factory=list)
    merge_history: list[dict[str, Any]] = Field(default_factory=list)
    version: int
    updated_at: Optional[datetime] = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        data = player.model_dump(mode="json", exclude={"career_stats", "created_at"})
        return cls(**data, career_stats=CareerStatsResponse.from_stats(player.career_stats))


class ConflictResponse(BaseModel):
    message: str
    existing_player: dict[str, Any]
    candidate: dict[str, Any]
    contested_fields: list[str]
    is_registered_user: bool
    is_linked: bool
    suggested_action: str


class MergeRequest(BaseModel):
    target_player_id: str
    source_player_id: Optional[str] = None
    candidate: Optional[PlayerCandidate] = None
    field_resolutions: dict[str, str] = Field(default_factory=dict)
    merge_career_stats: bool = False
    merged_by: Optional[str] = None


class MergeResponse(BaseModel):
    player: PlayerResponse
    source_player_id: Optional[str] = None
    applied_fields: list[str]
    ignored_fields: list[str]
    career_stats_merged: bool
    rewritten: dict[str, int]
    warnings: list[str] = Field(default_factory=list)
    repair_id: Optional[str] = None
