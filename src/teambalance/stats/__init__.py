"""Assignment statistics and export helpers."""

from .report import (
    AssignmentSummary,
    PositionStat,
    StatsMismatch,
    TeamSummary,
    position_stats,
    summarize_assignment,
    verify_totals,
)
from .export import EXPORT_HEADERS, export_teams_to_csv

__all__ = [
    "AssignmentSummary",
    "EXPORT_HEADERS",
    "PositionStat",
    "StatsMismatch",
    "TeamSummary",
    "export_teams_to_csv",
    "position_stats",
    "summarize_assignment",
    "verify_totals",
]
