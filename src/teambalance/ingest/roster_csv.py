"""Load roster CSV exports with configurable column mapping."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pydantic import BaseModel

from teambalance.config import PositionSet, get_position_set

from .bulk_text import ImportReport, ParsedLine, _parse_skill


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "name": "name",
    "skill": "skill",
    "position": "position",
}


class RosterRow(BaseModel):
    raw_name: str
    raw_skill: Optional[str] = None
    raw_position: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_skill=extract(parse_spec("skill")),
            raw_position=extract(parse_spec("position")),
        )

    def to_parsed(self, positions: PositionSet) -> ParsedLine:
        skill = _parse_skill(self.raw_skill.strip()) if self.raw_skill else None
        return ParsedLine(
            raw_name=self.raw_name.strip(),
            skill=skill,
            position=positions.normalize(self.raw_position),
        )


def rows_to_report(rows: Sequence[RosterRow], positions: PositionSet) -> ImportReport:
    report = ImportReport()
    # Row numbers account for the header line.
    for row_number, row in enumerate(rows, start=2):
        parsed = row.to_parsed(positions)
        if not parsed.raw_name:
            logger.debug("Dropping CSV row %d without a name", row_number)
            report.dropped_lines.append(row_number)
            continue
        participant = parsed.to_participant(positions)
        if parsed.skill is None:
            report.defaulted_skill.append(participant.name)
        if parsed.position is None:
            report.defaulted_position.append(participant.name)
        report.records.append(participant)
    return report


def load_roster_csv(
    path: Path,
    positions: PositionSet | None = None,
    *,
    mapping: Mapping[str, str] | None = None,
) -> ImportReport:
    positions = positions or get_position_set()
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    return rows_to_report(rows, positions)
