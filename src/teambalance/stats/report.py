"""Per-team and per-position projections of an assignment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from teambalance.config import PositionSet
from teambalance.models import Participant


class StatsMismatch(RuntimeError):
    """Raised when assignment totals disagree with the roster they came from."""


@dataclass(frozen=True)
class PositionStat:
    count: int
    skill_sum: int


@dataclass(frozen=True)
class TeamSummary:
    index: int
    size: int
    skill_sum: int
    positions: Dict[str, PositionStat]


@dataclass(frozen=True)
class AssignmentSummary:
    teams: List[TeamSummary]
    total_count: int
    total_skill: int
    skill_spread: int

    def to_dict(self) -> dict:
        return {
            "total_count": self.total_count,
            "total_skill": self.total_skill,
            "skill_spread": self.skill_spread,
            "teams": [
                {
                    "index": team.index,
                    "size": team.size,
                    "skill_sum": team.skill_sum,
                    "positions": {
                        code: {"count": stat.count, "skill_sum": stat.skill_sum}
                        for code, stat in team.positions.items()
                    },
                }
                for team in self.teams
            ],
        }


def position_stats(team: Sequence[Participant], positions: PositionSet) -> Dict[str, PositionStat]:
    """Headcount and skill total for each configured position, in set order."""

    counts = {code: 0 for code in positions.positions}
    sums = {code: 0 for code in positions.positions}
    for member in team:
        # Positions outside the set still count so totals stay exact.
        counts[member.position] = counts.get(member.position, 0) + 1
        sums[member.position] = sums.get(member.position, 0) + member.skill
    return {code: PositionStat(count=counts[code], skill_sum=sums[code]) for code in counts}


def summarize_assignment(
    teams: Sequence[Sequence[Participant]],
    positions: PositionSet,
) -> AssignmentSummary:
    summaries = [
        TeamSummary(
            index=index,
            size=len(team),
            skill_sum=sum(member.skill for member in team),
            positions=position_stats(team, positions),
        )
        for index, team in enumerate(teams)
    ]
    skill_totals = [summary.skill_sum for summary in summaries]
    return AssignmentSummary(
        teams=summaries,
        total_count=sum(summary.size for summary in summaries),
        total_skill=sum(skill_totals),
        skill_spread=(max(skill_totals) - min(skill_totals)) if skill_totals else 0,
    )


def verify_totals(roster: Sequence[Participant], summary: AssignmentSummary) -> None:
    """Cross-check that per-position stats add back up to the roster totals."""

    expected_count = len(roster)
    expected_skill = sum(member.skill for member in roster)
    position_count = sum(stat.count for team in summary.teams for stat in team.positions.values())
    position_skill = sum(stat.skill_sum for team in summary.teams for stat in team.positions.values())

    if summary.total_count != expected_count or position_count != expected_count:
        raise StatsMismatch(
            f"assignment holds {summary.total_count} participants "
            f"({position_count} by position), roster has {expected_count}"
        )
    if summary.total_skill != expected_skill or position_skill != expected_skill:
        raise StatsMismatch(
            f"assignment skill total {summary.total_skill} "
            f"({position_skill} by position), roster has {expected_skill}"
        )
