"""Boundary models shared by the store, the stats engine and the API."""

from .match import (
    Innings,
    InningsPlayer,
    Match,
    MatchData,
    MatchRosterEntry,
    ResultSummary,
    Scorecard,
)
from .performance import BattingStats, BowlingStats, FieldingStats, PlayerPerformance
from .player import (
    CareerStats,
    MergeHistoryEntry,
    Player,
    PlayerCandidate,
    User,
    better_figures,
    parse_figures,
)
from .team import Team

__all__ = [
    "BattingStats",
    "BowlingStats",
    "CareerStats",
    "FieldingStats",
    "Innings",
    "InningsPlayer",
    "Match",
    "MatchData",
    "MatchRosterEntry",
    "MergeHistoryEntry",
    "Player",
    "PlayerCandidate",
    "PlayerPerformance",
    "ResultSummary",
    "Scorecard",
    "Team",
    "User",
    "better_figures",
    "parse_figures",
]
