"""Standings tables (ranking, export)."""

from .export import export_standings_to_csv, format_nrr
from .table import StandingRow, build_standings

__all__ = [
    "StandingRow",
    "build_standings",
    "export_standings_to_csv",
    "format_nrr",
]
