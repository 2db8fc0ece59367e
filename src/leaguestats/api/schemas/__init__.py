"""Pydantic models for API I/O."""

from .match import FinalizeRequest, FinalizeResponse, RepairResponse
from .player import (
    CareerStatsResponse,
    ConflictResponse,
    MergeRequest,
    MergeResponse,
    PlayerResponse,
)
from .team import StandingRowResponse, TeamSummaryResponse

__all__ = [
    "CareerStatsResponse",
    "ConflictResponse",
    "FinalizeRequest",
    "FinalizeResponse",
    "MergeRequest",
    "MergeResponse",
    "PlayerResponse",
    "RepairResponse",
    "StandingRowResponse",
    "TeamSummaryResponse",
]
