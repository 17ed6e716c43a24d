"""CSV export helpers for team assignments."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from teambalance.config import PositionSet
from teambalance.models import Participant


EXPORT_HEADERS = ("team", "name", "position", "position_label", "skill")


def export_teams_to_csv(
    teams: Sequence[Sequence[Participant]],
    positions: PositionSet,
    *,
    hide_skills: bool = False,
) -> str:
    """Render one row per participant, teams numbered from 1.

    Members are listed in position-set order within each team. With
    ``hide_skills`` the skill column is left blank.
    """

    order = {code: rank for rank, code in enumerate(positions.positions)}

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for index, team in enumerate(teams, start=1):
        members = sorted(team, key=lambda member: order.get(member.position, len(order)))
        for member in members:
            writer.writerow([
                index,
                member.name,
                member.position,
                positions.label(member.position),
                "" if hide_skills else member.skill,
            ])
    return buffer.getvalue()


__all__ = ["EXPORT_HEADERS", "export_teams_to_csv"]
