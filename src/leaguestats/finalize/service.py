"""Record finalized matches into career and team statistics."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from leaguestats.config import DEFAULT_RULES, ScoringRules, get_rules
from leaguestats.models import Match, Player, PlayerPerformance
from leaguestats.persistence import DuplicatePerformance, LeagueStore, NotFound, StaleRecord
from leaguestats.stats import TeamSummary, accumulate, aggregate, classify, fold, rebuild


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

_MAX_RETRIES_ENV = "LEAGUESTATS_MAX_RETRIES"
_MAX_RETRIES_DEFAULT = 3


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _max_retries() -> int:
    return _env_int(_MAX_RETRIES_ENV, _MAX_RETRIES_DEFAULT, min_value=1)


def rules_for(match: Match) -> ScoringRules:
    try:
        return get_rules(match.sport, match.match_format)
    except KeyError:
        logger.warning(
            "No scoring rules for %s/%s; using %s %s",
            match.sport,
            match.match_format,
            DEFAULT_RULES.sport,
            DEFAULT_RULES.match_format,
        )
        return DEFAULT_RULES


@dataclass
class FinalizeReport:
    match_id: str
    recorded: List[str] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
    missing_players: List[str] = field(default_factory=list)
    team_summaries: Dict[str, TeamSummary] = field(default_factory=dict)


def record_performance(
    store: LeagueStore,
    performance: PlayerPerformance,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> Optional[Player]:
    """Add one match performance to its player's career exactly once.

    Returns the updated player, or ``None`` when a record for the same
    (match_id, player_id) already exists. A concurrent career update is
    retried from a fresh read up to ``LEAGUESTATS_MAX_RETRIES`` times.
    """

    attempts = _max_retries()
    for attempt in range(1, attempts + 1):
        player = store.get_player(performance.player_id)
        if store.has_performance(performance.match_id, performance.player_id):
            logger.warning(
                "Performance for %s in match %s already recorded; skipping",
                performance.player_id,
                performance.match_id,
            )
            return None
        career = accumulate(player.career_stats, performance, rules=rules)
        try:
            _, updated = store.record_performance_with_career(
                performance,
                {"career_stats": career},
                expected_version=player.version,
            )
        except DuplicatePerformance:
            logger.warning(
                "Performance for %s in match %s recorded concurrently; skipping",
                performance.player_id,
                performance.match_id,
            )
            return None
        except StaleRecord:
            if attempt == attempts:
                raise
            logger.info(
                "Player %s changed during accumulation; retrying (%d/%d)",
                performance.player_id,
                attempt,
                attempts,
            )
            continue
        return updated
    raise StaleRecord("Player", performance.player_id, -1)


def record_match_performances(
    store: LeagueStore,
    match_id: str,
    performances: Iterable[PlayerPerformance],
    *,
    rules: ScoringRules = DEFAULT_RULES,
    report: FinalizeReport | None = None,
) -> FinalizeReport:
    report = report or FinalizeReport(match_id=match_id)
    for performance in performances:
        if performance.match_id != match_id:
            raise ValueError(
                f"performance for {performance.player_id} belongs to match {performance.match_id}, not {match_id}"
            )
        try:
            updated = record_performance(store, performance, rules=rules)
        except NotFound:
            logger.warning("Player %s not found; performance not recorded", performance.player_id)
            report.missing_players.append(performance.player_id)
            continue
        if updated is None:
            report.duplicates.append(performance.player_id)
        else:
            report.recorded.append(performance.player_id)
    return report


def team_summary(store: LeagueStore, team_id: str, *, rules: ScoringRules = DEFAULT_RULES) -> TeamSummary:
    """Aggregate every completed match of ``team_id`` without writing."""

    matches = store.list_team_matches(team_id)
    return aggregate(team_id, (classify(match, team_id) for match in matches), rules=rules)


def rederive_team_stats(
    store: LeagueStore,
    team_id: str,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> TeamSummary:
    """Recompute a team's figures from its full match list and store them."""

    summary = team_summary(store, team_id, rules=rules)
    store.update_team_stats(team_id, summary.to_team_patch())
    _log_summary(summary)
    return summary


def apply_match_to_team(
    store: LeagueStore,
    team_id: str,
    match: Match,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> TeamSummary:
    """Add one newly completed match to a team's stored figures."""

    team = store.get_team(team_id)
    summary = fold(team, classify(match, team_id), rules=rules)
    store.update_team_stats(team_id, summary.to_team_patch())
    _log_summary(summary)
    return summary


def _log_summary(summary: TeamSummary) -> None:
    logger.info(
        "Team %s: %d-%d-%d, %d pts, NRR %s",
        summary.team_id,
        summary.wins,
        summary.losses,
        summary.draws,
        summary.tournament_points,
        f"{summary.net_run_rate:+.3f}" if summary.net_run_rate is not None else "n/a",
    )


def rebuild_player_career(
    store: LeagueStore,
    player_id: str,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> Player:
    """Replace a player's career with one recomputed from their performances."""

    player = store.get_player(player_id)
    career = rebuild(store.get_player_performances(player_id), rules=rules)
    return store.update_player(player_id, {"career_stats": career}, expected_version=player.version)


def finalize_match(
    store: LeagueStore,
    match: Match,
    performances: Iterable[PlayerPerformance] = (),
) -> FinalizeReport:
    """Store a completed match, record its performances and update both teams.

    Each team's stored figures get this match added on top. A match that was
    already completed is being corrected, so its teams are recomputed from
    their full match lists instead.
    """

    if match.status != "completed":
        match = match.model_copy(update={"status": "completed"})
    rules = rules_for(match)
    try:
        refinalized = store.get_match(match.id).status == "completed"
    except NotFound:
        refinalized = False
    store.save_match(match)

    report = record_match_performances(store, match.id, performances, rules=rules)
    for team_id in match.team_ids:
        if not team_id:
            continue
        try:
            if refinalized:
                logger.info("Match %s was already finalized; recomputing team %s", match.id, team_id)
                report.team_summaries[team_id] = rederive_team_stats(store, team_id, rules=rules)
            else:
                report.team_summaries[team_id] = apply_match_to_team(store, team_id, match, rules=rules)
        except NotFound:
            logger.warning("Team %s not stored; standings not updated", team_id)

    logger.info(
        "Finalized match %s: %d recorded, %d duplicates, %d missing players",
        match.id,
        len(report.recorded),
        len(report.duplicates),
        len(report.missing_players),
    )
    return report


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
