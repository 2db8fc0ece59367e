"""Rank teams into a standings table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from leaguestats.stats import TeamSummary


@dataclass(frozen=True)
class StandingRow:
    position: int
    team_id: str
    team_name: str
    played: int
    wins: int
    losses: int
    draws: int
    no_results: int
    points: int
    net_run_rate: Optional[float]


def _sort_key(summary: TeamSummary) -> tuple:
    # Teams without NRR data sort after every team that has it.
    nrr = summary.net_run_rate
    return (
        -summary.tournament_points,
        nrr is None,
        -(nrr or 0.0),
        -summary.wins,
        summary.team_id,
    )


def build_standings(
    summaries: Iterable[TeamSummary],
    *,
    team_names: Mapping[str, str] | None = None,
) -> List[StandingRow]:
    """Order by points, then net run rate, then wins."""

    team_names = team_names or {}
    rows = []
    for position, summary in enumerate(sorted(summaries, key=_sort_key), start=1):
        rows.append(
            StandingRow(
                position=position,
                team_id=summary.team_id,
                team_name=team_names.get(summary.team_id, summary.team_id),
                played=summary.total_matches,
                wins=summary.wins,
                losses=summary.losses,
                draws=summary.draws,
                no_results=summary.skipped_matches,
                points=summary.tournament_points,
                net_run_rate=summary.net_run_rate,
            )
        )
    return rows


__all__ = ["StandingRow", "build_standings"]
