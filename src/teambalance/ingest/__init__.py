"""Input adapters that normalize raw roster data."""

from .bulk_text import (
    EmptyRoster,
    ImportReport,
    ParsedLine,
    UnparseableRecord,
    load_roster_text,
    parse_bulk_text,
    parse_line,
    require_records,
)
from .roster_csv import DEFAULT_ROSTER_MAPPING, RosterRow, load_roster_csv, rows_to_report

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "EmptyRoster",
    "ImportReport",
    "ParsedLine",
    "RosterRow",
    "UnparseableRecord",
    "load_roster_csv",
    "load_roster_text",
    "parse_bulk_text",
    "parse_line",
    "require_records",
    "rows_to_report",
]
