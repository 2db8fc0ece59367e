"""Player identity matching and merging."""

from .matcher import (
    IdentityConflict,
    IdentityMatch,
    Registration,
    build_conflict,
    contested_fields,
    match_identity,
    register_player,
)
from .merge import (
    SOURCE_RECORD,
    MergeResult,
    ReferenceRewriteIncomplete,
    SourceNotFound,
    TargetNotFound,
    merge_candidate,
    merge_players,
    run_reference_repairs,
)

__all__ = [
    "SOURCE_RECORD",
    "IdentityConflict",
    "IdentityMatch",
    "MergeResult",
    "ReferenceRewriteIncomplete",
    "Registration",
    "SourceNotFound",
    "TargetNotFound",
    "build_conflict",
    "contested_fields",
    "match_identity",
    "merge_candidate",
    "merge_players",
    "register_player",
    "run_reference_repairs",
]
