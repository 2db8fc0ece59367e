"""CSV export for standings tables."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Optional, Sequence

from leaguestats.standings.table import StandingRow

STANDINGS_HEADERS = ("Pos", "Team", "P", "W", "L", "D", "NR", "Pts", "NRR")


def format_nrr(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:+.3f}"


def export_standings_to_csv(rows: Sequence[StandingRow]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(STANDINGS_HEADERS)
    for row in rows:
        writer.writerow(
            [
                row.position,
                row.team_name,
                row.played,
                row.wins,
                row.losses,
                row.draws,
                row.no_results,
                row.points,
                format_nrr(row.net_run_rate),
            ]
        )
    return buffer.getvalue()


__all__ = ["STANDINGS_HEADERS", "export_standings_to_csv", "format_nrr"]
