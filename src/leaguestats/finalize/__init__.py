from .service import (
    FinalizeReport,
    apply_match_to_team,
    finalize_match,
    rebuild_player_career,
    record_match_performances,
    record_performance,
    rederive_team_stats,
    rules_for,
    team_summary,
)

__all__ = [
    "FinalizeReport",
    "apply_match_to_team",
    "finalize_match",
    "rebuild_player_career",
    "record_match_performances",
    "record_performance",
    "rederive_team_stats",
    "rules_for",
    "team_summary",
]
