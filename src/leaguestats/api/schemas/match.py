from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from leaguestats.models import PlayerPerformance

from .team import TeamSummaryResponse


class FinalizeRequest(BaseModel):
    performances: list[PlayerPerformance] = Field(default_factory=list)


class FinalizeResponse(BaseModel):
    match_id: str
    recorded: list[str]
    duplicates: list[str]
    missing_players: list[str]
    team_summaries: list[TeamSummaryResponse] = Field(default_factory=list)


class RepairResponse(BaseModel):
    repair_id: str
    old_player_id: str
    new_player_id: str
    pending_collections: list[str]
    attempts: int
    last_error: Optional[str] = None
    resolved: bool
