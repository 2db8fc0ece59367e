"""Fold a team's classified match results into tournament figures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from leaguestats.config import DEFAULT_RULES, ScoringRules
from leaguestats.models import Team
from leaguestats.overs import run_rate
from leaguestats.stats.classifier import Classification


@dataclass(frozen=True)
class TeamSummary:
    """Aggregated record of one team.

    ``total_runs_*`` and wickets cover every counted match. The ball counts
    and ``nrr_runs_*`` only cover matches with overs on every innings, and
    ``nrr_excluded_matches`` counts the ones left out of the rate.
    """

    team_id: str
    wins: int
    losses: int
    draws: int
    total_matches: int
    skipped_matches: int
    win_rate: float
    tournament_points: int
    total_runs_scored: int
    total_runs_conceded: int
    total_wickets_taken: int
    total_wickets_lost: int
    total_balls_faced: int
    total_balls_bowled: int
    nrr_runs_scored: int
    nrr_runs_conceded: int
    nrr_excluded_matches: int
    has_nrr_data: bool
    net_run_rate: Optional[float]

    @property
    def total_completed_matches(self) -> int:
        return self.total_matches + self.skipped_matches

    def to_team_patch(self) -> dict:
        """Patch for :meth:`LeagueStore.update_team_stats`."""

        return {
            "matches_won": self.wins,
            "matches_lost": self.losses,
            "matches_drawn": self.draws,
            "matches_no_result": self.skipped_matches,
            "total_runs_scored": self.total_runs_scored,
            "total_runs_conceded": self.total_runs_conceded,
            "total_wickets_taken": self.total_wickets_taken,
            "total_wickets_lost": self.total_wickets_lost,
            "tournament_points": self.tournament_points,
            "total_balls_faced": self.total_balls_faced,
            "total_balls_bowled": self.total_balls_bowled,
            "nrr_runs_scored": self.nrr_runs_scored,
            "nrr_runs_conceded": self.nrr_runs_conceded,
            "nrr_excluded_matches": self.nrr_excluded_matches,
            "net_run_rate": round(self.net_run_rate, 3) if self.net_run_rate is not None else None,
        }


def net_run_rate(
    runs_scored: int,
    balls_faced: int,
    runs_conceded: int,
    balls_bowled: int,
) -> Optional[float]:
    """Runs per over scored minus runs per over conceded.

    Returns ``None`` unless both ball counts are positive; a team that has
    only batted or only bowled has no meaningful rate.
    """

    scored = run_rate(runs_scored, balls_faced)
    conceded = run_rate(runs_conceded, balls_bowled)
    if scored is None or conceded is None:
        return None
    return scored - conceded


@dataclass
class _Tally:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    skipped: int = 0
    runs_scored: int = 0
    runs_conceded: int = 0
    wickets_taken: int = 0
    wickets_lost: int = 0
    balls_faced: int = 0
    balls_bowled: int = 0
    nrr_runs_scored: int = 0
    nrr_runs_conceded: int = 0
    nrr_excluded: int = 0

    @classmethod
    def from_team(cls, team: Team) -> "_Tally":
        return cls(
            wins=team.matches_won,
            losses=team.matches_lost,
            draws=team.matches_drawn,
            skipped=team.matches_no_result,
            runs_scored=team.total_runs_scored,
            runs_conceded=team.total_runs_conceded,
            wickets_taken=team.total_wickets_taken,
            wickets_lost=team.total_wickets_lost,
            balls_faced=team.total_balls_faced,
            balls_bowled=team.total_balls_bowled,
            nrr_runs_scored=team.nrr_runs_scored,
            nrr_runs_conceded=team.nrr_runs_conceded,
            nrr_excluded=team.nrr_excluded_matches,
        )

    def add(self, item: Classification) -> None:
        if item.outcome == "skip":
            self.skipped += 1
            return
        if item.outcome == "win":
            self.wins += 1
        elif item.outcome == "loss":
            self.losses += 1
        else:
            self.draws += 1
        self.runs_scored += item.batting.runs
        self.wickets_lost += item.batting.wickets
        self.runs_conceded += item.bowling.runs
        self.wickets_taken += item.bowling.wickets
        if not item.has_ball_data:
            self.nrr_excluded += 1
            return
        self.balls_faced += item.batting.balls
        self.balls_bowled += item.bowling.balls
        self.nrr_runs_scored += item.batting.runs
        self.nrr_runs_conceded += item.bowling.runs

    def summary(self, team_id: str, rules: ScoringRules) -> TeamSummary:
        total_matches = self.wins + self.losses + self.draws
        nrr = net_run_rate(self.nrr_runs_scored, self.balls_faced, self.nrr_runs_conceded, self.balls_bowled)
        return TeamSummary(
            team_id=team_id,
            wins=self.wins,
            losses=self.losses,
            draws=self.draws,
            total_matches=total_matches,
            skipped_matches=self.skipped,
            win_rate=self.wins / total_matches * 100 if total_matches else 0.0,
            tournament_points=self.wins * rules.points_per_win + self.draws * rules.points_per_draw,
            total_runs_scored=self.runs_scored,
            total_runs_conceded=self.runs_conceded,
            total_wickets_taken=self.wickets_taken,
            total_wickets_lost=self.wickets_lost,
            total_balls_faced=self.balls_faced,
            total_balls_bowled=self.balls_bowled,
            nrr_runs_scored=self.nrr_runs_scored,
            nrr_runs_conceded=self.nrr_runs_conceded,
            nrr_excluded_matches=self.nrr_excluded,
            has_nrr_data=nrr is not None,
            net_run_rate=nrr,
        )


def _relevant(item: Classification, team_id: str) -> bool:
    return item.participated and item.team_id == team_id


def aggregate(
    team: Team | str,
    classifications: Iterable[Classification],
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> TeamSummary:
    team_id = team if isinstance(team, str) else team.id
    tally = _Tally()
    for item in classifications:
        if _relevant(item, team_id):
            tally.add(item)
    return tally.summary(team_id, rules)


def fold(team: Team, classification: Classification, *, rules: ScoringRules = DEFAULT_RULES) -> TeamSummary:
    """Add one newly completed match to a team's stored figures."""

    tally = _Tally.from_team(team)
    if _relevant(classification, team.id):
        tally.add(classification)
    return tally.summary(team.id, rules)


__all__ = ["TeamSummary", "aggregate", "fold", "net_run_rate"]
