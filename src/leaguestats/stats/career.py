"""Fold per-match performances into a player's career aggregate.

Every function here is pure. :func:`accumulate` does not deduplicate: the
same performance passed twice is counted twice. Callers own idempotence and
must check for an existing (match_id, player_id) record first; the store's
unique key backs that check.
"""

from __future__ import annotations

from typing import Iterable

from leaguestats.config import DEFAULT_RULES, ScoringRules
from leaguestats.models import CareerStats, PlayerPerformance, better_figures

_AWARD_COUNTERS = {
    "man-of-match": "man_of_the_match_awards",
    "best-batsman": "best_batsman_awards",
    "best-bowler": "best_bowler_awards",
    "best-fielder": "best_fielder_awards",
}

_SUMMED_FIELDS = (
    "total_runs",
    "total_balls_faced",
    "total_fours",
    "total_sixes",
    "centuries",
    "half_centuries",
    "innings",
    "dismissals",
    "balls_bowled",
    "total_runs_conceded",
    "total_wickets",
    "total_maidens",
    "five_wicket_hauls",
    "catches",
    "run_outs",
    "stumpings",
    "total_matches",
    "matches_won",
    "man_of_the_match_awards",
    "best_batsman_awards",
    "best_bowler_awards",
    "best_fielder_awards",
)


def accumulate(
    existing: CareerStats,
    delta: PlayerPerformance,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> CareerStats:
    """Return ``existing`` with one match's numbers added."""

    values = existing.model_dump()

    batting = delta.batting_stats
    if batting is not None:
        values["total_runs"] += batting.runs
        values["total_balls_faced"] += batting.balls
        values["total_fours"] += batting.fours
        values["total_sixes"] += batting.sixes
        values["innings"] += 1
        if batting.dismissed:
            values["dismissals"] += 1
        if batting.runs >= rules.century_runs:
            values["centuries"] += 1
        elif batting.runs >= rules.half_century_runs:
            values["half_centuries"] += 1
        values["highest_score"] = max(values["highest_score"], batting.runs)

    bowling = delta.bowling_stats
    if bowling is not None:
        values["balls_bowled"] += bowling.balls
        values["total_runs_conceded"] += bowling.runs
        values["total_wickets"] += bowling.wickets
        values["total_maidens"] += bowling.maidens
        if bowling.wickets >= rules.five_wicket_haul:
            values["five_wicket_hauls"] += 1
        if bowling.balls > 0:
            values["best_bowling_figures"] = better_figures(
                values["best_bowling_figures"], f"{bowling.wickets}/{bowling.runs}"
            )

    fielding = delta.fielding_stats
    if fielding is not None:
        values["catches"] += fielding.catches
        values["run_outs"] += fielding.run_outs
        values["stumpings"] += fielding.stumpings

    values["total_matches"] += 1
    if delta.match_result == "won":
        values["matches_won"] += 1

    for award in delta.awards:
        counter = _AWARD_COUNTERS.get(award)
        if counter:
            values[counter] += 1

    return CareerStats.model_validate(values)


def combine(first: CareerStats, second: CareerStats) -> CareerStats:
    """Sum two careers, e.g. when a merge folds a duplicate identity's history."""

    left = first.model_dump()
    right = second.model_dump()
    values = {field: left[field] + right[field] for field in _SUMMED_FIELDS}
    values["highest_score"] = max(left["highest_score"], right["highest_score"])
    values["best_bowling_figures"] = better_figures(
        left["best_bowling_figures"], right["best_bowling_figures"]
    )
    return CareerStats.model_validate(values)


def rebuild(
    performances: Iterable[PlayerPerformance],
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> CareerStats:
    """Recompute a career from scratch out of its full performance history."""

    stats = CareerStats()
    for performance in performances:
        stats = accumulate(stats, performance, rules=rules)
    return stats


__all__ = ["accumulate", "combine", "rebuild"]
