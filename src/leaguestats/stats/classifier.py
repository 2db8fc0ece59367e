"""Classify a completed match from one team's point of view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from leaguestats.models import Match

Outcome = Literal["win", "loss", "draw", "skip"]

# Reasons attached to ``skip`` outcomes.
NOT_PARTICIPANT = "not-participant"
NO_RESULT = "no-result"
AMBIGUOUS_RESULT = "ambiguous"

_NO_RESULT_TYPES = {"no-result", "abandoned"}


@dataclass(frozen=True)
class InningsContribution:
    runs: int = 0
    wickets: int = 0
    balls: int = 0
    innings: int = 0

    def add(self, runs: int, wickets: int, balls: int) -> "InningsContribution":
        return InningsContribution(
            runs=self.runs + runs,
            wickets=self.wickets + wickets,
            balls=self.balls + balls,
            innings=self.innings + 1,
        )


@dataclass(frozen=True)
class Classification:
    """Outcome of one match for one team plus its innings contributions.

    ``batting`` holds runs scored / wickets lost / balls faced and ``bowling``
    holds runs conceded / wickets taken / balls bowled. Both stay empty for
    ``skip`` outcomes. ``has_ball_data`` is false when any innings of the
    match lacks an overs figure; such a match still counts for results and
    run totals but must not feed rate calculations.
    """

    match_id: str
    team_id: str
    participated: bool
    outcome: Outcome
    batting: InningsContribution = field(default_factory=InningsContribution)
    bowling: InningsContribution = field(default_factory=InningsContribution)
    reason: str | None = None
    has_ball_data: bool = True

    @property
    def counts(self) -> bool:
        return self.outcome != "skip"


def _outcome(match: Match, team_id: str) -> tuple[Outcome, str | None]:
    summary = match.match_data.result_summary
    result_type = (summary.result_type or "").strip().lower() if summary else ""
    winner_id = summary.winner_id if summary else None

    if result_type == "tied":
        return "draw", None
    if winner_id:
        return ("win" if winner_id == team_id else "loss"), None
    if result_type in _NO_RESULT_TYPES:
        return "skip", NO_RESULT
    # Never count a match without a definitive result as a loss or a draw.
    return "skip", AMBIGUOUS_RESULT


def classify(match: Match, team_id: str) -> Classification:
    """Classify ``match`` for ``team_id``.

    Raises :class:`~leaguestats.overs.InvalidOversFormat` when a counted
    innings carries an overs value that is not a legal ball count.
    """

    if team_id not in match.team_ids:
        return Classification(
            match_id=match.id,
            team_id=team_id,
            participated=False,
            outcome="skip",
            reason=NOT_PARTICIPANT,
        )

    outcome, reason = _outcome(match, team_id)
    if outcome == "skip":
        return Classification(
            match_id=match.id,
            team_id=team_id,
            participated=True,
            outcome=outcome,
            reason=reason,
        )

    batting = InningsContribution()
    bowling = InningsContribution()
    has_ball_data = True
    scorecard = match.match_data.scorecard
    if scorecard is not None:
        for innings in scorecard.all_innings():
            if innings.total_overs is None:
                has_ball_data = False
            if innings.batting_team_id == team_id:
                batting = batting.add(innings.total_runs, innings.total_wickets, innings.balls)
            else:
                bowling = bowling.add(innings.total_runs, innings.total_wickets, innings.balls)

    return Classification(
        match_id=match.id,
        team_id=team_id,
        participated=True,
        outcome=outcome,
        batting=batting,
        bowling=bowling,
        has_ball_data=has_ball_data,
    )


__all__ = [
    "AMBIGUOUS_RESULT",
    "Classification",
    "InningsContribution",
    "NOT_PARTICIPANT",
    "NO_RESULT",
    "Outcome",
    "classify",
]
