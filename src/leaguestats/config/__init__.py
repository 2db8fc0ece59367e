"""Configuration helpers for scoring rules and mergeable fields."""

from .scoring import (
    DEFAULT_RULES,
    LINKED_PLAYER_FIELDS,
    MERGEABLE_PLAYER_FIELDS,
    ScoringRules,
    get_rules,
    get_rules_by_key,
    iter_rules,
)

__all__ = [
    "DEFAULT_RULES",
    "LINKED_PLAYER_FIELDS",
    "MERGEABLE_PLAYER_FIELDS",
    "ScoringRules",
    "get_rules",
    "get_rules_by_key",
    "iter_rules",
]
