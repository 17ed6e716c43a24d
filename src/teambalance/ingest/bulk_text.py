"""Parse free-form roster text (one participant per line)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from teambalance.config import PositionSet, get_position_set
from teambalance.models import Participant
from teambalance.models.participant import DEFAULT_SKILL, MAX_SKILL, MIN_SKILL


logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,;]+")
_QUOTED_NAME = re.compile(r"""^(["'])(.*?)\1(.*)$""")


class UnparseableRecord(ValueError):
    """Raised when a roster line does not yield a participant name."""


class EmptyRoster(ValueError):
    """Raised when an import batch produced no usable participants."""


class ParsedLine(BaseModel):
    """Fields pulled out of one roster line before defaults are applied."""

    raw_name: str
    skill: Optional[int] = None
    position: Optional[str] = None

    def to_participant(self, positions: PositionSet) -> Participant:
        return Participant(
            name=self.raw_name,
            skill=self.skill if self.skill is not None else DEFAULT_SKILL,
            position=self.position or positions.default,
        )


@dataclass
class ImportReport:
    records: List[Participant] = field(default_factory=list)
    dropped_lines: List[int] = field(default_factory=list)
    defaulted_skill: List[str] = field(default_factory=list)
    defaulted_position: List[str] = field(default_factory=list)


def _parse_skill(token: str) -> Optional[int]:
    if not token.isdecimal():
        return None
    value = int(token)
    if MIN_SKILL <= value <= MAX_SKILL:
        return value
    return None


def _tokens(text: str) -> List[str]:
    return [token for token in _SEPARATORS.split(text) if token]


def _split_fields(line: str, positions: PositionSet) -> ParsedLine:
    text = line.strip()
    skill: Optional[int] = None
    position: Optional[str] = None

    quoted = _QUOTED_NAME.match(text)
    if quoted:
        # Everything after a quoted name is a field; unknown tokens are ignored.
        name = quoted.group(2).strip()
        for token in _tokens(quoted.group(3)):
            for part in (p for p in token.split("-") if p):
                value = _parse_skill(part)
                if value is not None and skill is None:
                    skill = value
                elif position is None and positions.contains(part):
                    position = positions.normalize(part)
        return ParsedLine(raw_name=name, skill=skill, position=position)

    # Dashes split fields too; parts remember their token so hyphenated names survive.
    parts = [
        (index, part)
        for index, token in enumerate(_tokens(text))
        for part in token.split("-")
        if part
    ]
    end = len(parts)
    # Consume trailing skill/position fields; the first part always belongs to the name.
    while end > 1:
        part = parts[end - 1][1]
        value = _parse_skill(part)
        if value is not None and skill is None:
            skill = value
        elif position is None and positions.contains(part):
            position = positions.normalize(part)
        else:
            break
        end -= 1

    words: Dict[int, List[str]] = {}
    for index, part in parts[:end]:
        words.setdefault(index, []).append(part)
    name = " ".join("-".join(group) for group in words.values()).strip("\"' ")
    return ParsedLine(raw_name=name, skill=skill, position=position)


def parse_line(line: str, positions: PositionSet | None = None) -> Participant:
    """Parse a single roster line such as ``"Nguyen Van A, 3, ST"``."""

    positions = positions or get_position_set()
    parsed = _split_fields(line, positions)
    if not parsed.raw_name:
        raise UnparseableRecord(f"no participant name in line {line!r}")
    return parsed.to_participant(positions)


def parse_bulk_text(text: str, positions: PositionSet | None = None) -> ImportReport:
    """Parse a block of roster lines, dropping those without a name."""

    positions = positions or get_position_set()
    report = ImportReport()
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        parsed = _split_fields(line, positions)
        if not parsed.raw_name:
            logger.debug("Dropping roster line %d without a name: %r", line_number, line)
            report.dropped_lines.append(line_number)
            continue
        participant = parsed.to_participant(positions)
        if parsed.skill is None:
            report.defaulted_skill.append(participant.name)
        if parsed.position is None:
            report.defaulted_position.append(participant.name)
        report.records.append(participant)

    logger.debug(
        "Parsed %d participants (%d dropped, %d default skill, %d default position)",
        len(report.records),
        len(report.dropped_lines),
        len(report.defaulted_skill),
        len(report.defaulted_position),
    )
    return report


def load_roster_text(path: Path, positions: PositionSet | None = None) -> ImportReport:
    return parse_bulk_text(path.read_text(encoding="utf-8"), positions)


def require_records(report: ImportReport) -> Sequence[Participant]:
    """Return the imported participants, raising EmptyRoster when none survived."""

    if not report.records:
        raise EmptyRoster(
            f"no usable participants in import ({len(report.dropped_lines)} lines dropped)"
        )
    return report.records
