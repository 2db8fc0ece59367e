"""Scoring configuration for supported sport/format combinations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple, Union


# Player fields an operator may resolve during a merge. ``email`` is the
# identity key and is never part of a resolution.
MERGEABLE_PLAYER_FIELDS: Tuple[str, ...] = (
    "name",
    "team_id",
    "team_name",
    "role",
    "batting_style",
    "bowling_style",
    "jersey_number",
)

# Fields naming the same thing; a resolution for one also decides the other.
LINKED_PLAYER_FIELDS: Dict[str, str] = {"team_id": "team_name", "team_name": "team_id"}


@dataclass(frozen=True)
class ScoringRules:
    sport: str
    match_format: str
    points_per_win: int
    points_per_draw: int
    balls_per_over: int
    century_runs: int
    half_century_runs: int
    five_wicket_haul: int


_SCORING_RULES: Dict[Tuple[str, str], ScoringRules] = {
    ("CRICKET", "T20"): ScoringRules(
        sport="CRICKET",
        match_format="T20",
        points_per_win=2,
        points_per_draw=1,
        balls_per_over=6,
        century_runs=100,
        half_century_runs=50,
        five_wicket_haul=5,
    ),
    ("CRICKET", "T10"): ScoringRules(
        sport="CRICKET",
        match_format="T10",
        points_per_win=2,
        points_per_draw=1,
        balls_per_over=6,
        century_runs=100,
        half_century_runs=50,
        five_wicket_haul=5,
    ),
    ("CRICKET", "ODI"): ScoringRules(
        sport="CRICKET",
        match_format="ODI",
        points_per_win=2,
        points_per_draw=1,
        balls_per_over=6,
        century_runs=100,
        half_century_runs=50,
        five_wicket_haul=5,
    ),
    ("CRICKET", "TEST"): ScoringRules(
        sport="CRICKET",
        match_format="TEST",
        points_per_win=2,
        points_per_draw=1,
        balls_per_over=6,
        century_runs=100,
        half_century_runs=50,
        five_wicket_haul=5,
    ),
}

DEFAULT_RULES_KEY: Tuple[str, str] = ("CRICKET", "T20")


def iter_rules() -> Iterable[ScoringRules]:
    """Return an iterator of all configured rule sets."""

    return _SCORING_RULES.values()


def get_rules(sport: str = "cricket", match_format: str | None = None) -> ScoringRules:
    """Fetch rules for a sport/format pair, raising KeyError if missing."""

    key = (sport.upper(), (match_format or DEFAULT_RULES_KEY[1]).upper())
    if key not in _SCORING_RULES:
        raise KeyError(f"No scoring rules configured for sport={sport!r}, format={match_format!r}")
    return _SCORING_RULES[key]


def get_rules_by_key(rules_key: Union[str, Tuple[str, str]]) -> ScoringRules:
    """Resolve rules using either "SPORT_FORMAT" or (sport, format)."""

    if isinstance(rules_key, tuple):
        sport, match_format = rules_key
        return get_rules(sport, match_format)

    if not isinstance(rules_key, str):
        raise TypeError("rules_key must be a str or (sport, format) tuple")

    parts = rules_key.split("_", 1)
    if len(parts) != 2:
        raise ValueError(f"rules_key must look like 'SPORT_FORMAT', got {rules_key!r}")

    sport, match_format = parts
    return get_rules(sport, match_format)


DEFAULT_RULES: ScoringRules = _SCORING_RULES[DEFAULT_RULES_KEY]

SCORING_CONFIG: Mapping[str, ScoringRules] = {
    f"{sport}_{match_format}": rules for (sport, match_format), rules in _SCORING_RULES.items()
}
