"""Greedy swap-based local search that evens out an assignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from teambalance.config import BalanceSettings, PositionSet, get_position_set
from teambalance.models import Participant

from .partition import Team


logger = logging.getLogger(__name__)

# (max - min, sum of squares); lexicographic comparison.
ImbalanceKey = Tuple[int, int]


class OptimizerState(str, Enum):
    SCANNING = "scanning"
    IMPROVING = "improving"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class Objective(str, Enum):
    SIZE = "size"
    SKILL = "skill"
    POSITION_COUNT = "position_count"
    POSITION_SKILL = "position_skill"


@dataclass(frozen=True)
class SwapRecord:
    """One accepted move and the objective metric before/after it."""

    objective: Objective
    team_a: int
    team_b: int
    outgoing: Participant
    incoming: Optional[Participant]
    position: Optional[str]
    before: Tuple[int, ...]
    after: Tuple[int, ...]


def skill_sums(teams: Sequence[Team]) -> List[int]:
    return [sum(member.skill for member in team) for team in teams]


def imbalance(values: Sequence[int]) -> ImbalanceKey:
    if not values:
        return (0, 0)
    return (max(values) - min(values), sum(value * value for value in values))


def skill_spread(teams: Sequence[Team]) -> int:
    return imbalance(skill_sums(teams))[0]


def _extremes(values: Sequence[int]) -> Tuple[int, int]:
    """Indices of the first maximum and first minimum."""

    high = max(range(len(values)), key=values.__getitem__)
    low = min(range(len(values)), key=values.__getitem__)
    return high, low


def _shifted(values: Sequence[int], high: int, low: int, delta: int) -> List[int]:
    trial = list(values)
    trial[high] -= delta
    trial[low] += delta
    return trial


class BalanceOptimizer:
    """Single-swap-per-iteration optimizer over a mutable assignment.

    Each iteration walks the objectives in priority order (team size, skill
    totals, position headcounts, then per-position skill totals when
    enabled) and performs the first improving move it finds. The run stops
    as soon as a full pass finds nothing to improve, or when
    ``settings.max_iterations`` passes have been spent.
    """

    def __init__(
        self,
        teams: List[Team],
        settings: BalanceSettings | None = None,
        *,
        positions: PositionSet | None = None,
    ) -> None:
        self.teams = teams
        self.settings = settings or BalanceSettings()
        self.positions = positions or get_position_set()
        self.state = OptimizerState.SCANNING
        self.iterations = 0
        self.swaps: List[SwapRecord] = []

    @property
    def converged(self) -> bool:
        return self.state is OptimizerState.CONVERGED

    def run(self) -> List[Team]:
        self.state = OptimizerState.SCANNING
        while self.iterations < self.settings.max_iterations:
            self.iterations += 1
            if self._step():
                self.state = OptimizerState.IMPROVING
                continue
            self.state = OptimizerState.CONVERGED
            break
        else:
            self.state = OptimizerState.EXHAUSTED

        logger.debug(
            "Optimizer %s after %d iterations (%d moves, skill spread %d)",
            self.state.value,
            self.iterations,
            len(self.swaps),
            skill_spread(self.teams),
        )
        return self.teams

    def _step(self) -> bool:
        if self._balance_sizes():
            return True
        if self._balance_skill():
            return True
        if self._balance_position_counts():
            return True
        if self.settings.balance_position_skill and self._balance_position_skill():
            return True
        return False

    # -- moves -------------------------------------------------------------

    def _swap(self, team_a: int, index_a: int, team_b: int, index_b: int) -> Tuple[Participant, Participant]:
        outgoing = self.teams[team_a][index_a]
        incoming = self.teams[team_b][index_b]
        self.teams[team_a][index_a] = incoming
        self.teams[team_b][index_b] = outgoing
        return outgoing, incoming

    def _record(self, record: SwapRecord) -> None:
        self.swaps.append(record)
        logger.debug(
            "%s move: team %d <-> team %d (%s for %s), %s -> %s",
            record.objective.value,
            record.team_a,
            record.team_b,
            record.outgoing.name,
            record.incoming.name if record.incoming is not None else "-",
            record.before,
            record.after,
        )

    def _skill_bound(self, sums: Sequence[int]) -> int:
        """Largest skill spread a non-skill move may leave behind."""

        return max(self.settings.tolerance, imbalance(sums)[0])

    # -- objectives --------------------------------------------------------

    def _balance_sizes(self) -> bool:
        sizes = [len(team) for team in self.teams]
        current = imbalance(sizes)
        if current[0] <= 1:
            return False

        high, low = _extremes(sizes)
        sums = skill_sums(self.teams)
        best_index = 0
        best_key: Optional[ImbalanceKey] = None
        for index, member in enumerate(self.teams[high]):
            key = imbalance(_shifted(sums, high, low, member.skill))
            if best_key is None or key < best_key:
                best_index, best_key = index, key

        member = self.teams[high].pop(best_index)
        self.teams[low].append(member)
        self._record(
            SwapRecord(
                objective=Objective.SIZE,
                team_a=high,
                team_b=low,
                outgoing=member,
                incoming=None,
                position=None,
                before=current,
                after=imbalance([len(team) for team in self.teams]),
            )
        )
        return True

    def _balance_skill(self) -> bool:
        tolerance = self.settings.tolerance
        sums = skill_sums(self.teams)
        current = imbalance(sums)
        if current[0] <= tolerance:
            return False

        high, low = _extremes(sums)
        best: Optional[Tuple[int, int]] = None
        best_key = current
        for i, strong in enumerate(self.teams[high]):
            for j, weak in enumerate(self.teams[low]):
                if self.settings.same_position_swaps and strong.position != weak.position:
                    continue
                delta = strong.skill - weak.skill
                if delta <= 0:
                    continue
                key = imbalance(_shifted(sums, high, low, delta))
                if self.settings.require_within_tolerance and key[0] > tolerance:
                    continue
                if key < best_key:
                    best, best_key = (i, j), key

        if best is None:
            return False

        outgoing, incoming = self._swap(high, best[0], low, best[1])
        self._record(
            SwapRecord(
                objective=Objective.SKILL,
                team_a=high,
                team_b=low,
                outgoing=outgoing,
                incoming=incoming,
                position=None,
                before=current,
                after=best_key,
            )
        )
        return True

    def _position_counts(self) -> Dict[str, List[int]]:
        counts: Dict[str, List[int]] = {
            position: [0] * len(self.teams) for position in self.positions.positions
        }
        for index, team in enumerate(self.teams):
            for member in team:
                counts.setdefault(member.position, [0] * len(self.teams))[index] += 1
        return counts

    def _balance_position_counts(self) -> bool:
        counts = self._position_counts()
        potential = sum(value * value for per_team in counts.values() for value in per_team)
        sums = skill_sums(self.teams)
        skill_bound = self._skill_bound(sums)

        for position, per_team in counts.items():
            if imbalance(per_team)[0] <= 1:
                continue
            high, low = _extremes(per_team)
            best: Optional[Tuple[int, int]] = None
            best_key: Optional[Tuple[int, ImbalanceKey]] = None
            # Moving one holder high->low lowers this position's potential by at least 2.
            holder_gain = 2 * (per_team[low] - per_team[high] + 1)
            for i, holder in enumerate(self.teams[high]):
                if holder.position != position:
                    continue
                for j, other in enumerate(self.teams[low]):
                    if other.position == position:
                        continue
                    other_counts = counts[other.position]
                    other_gain = 2 * (other_counts[high] - other_counts[low] + 1)
                    new_potential = potential + holder_gain + other_gain
                    if new_potential >= potential:
                        continue
                    skill_key = imbalance(_shifted(sums, high, low, holder.skill - other.skill))
                    if skill_key[0] > skill_bound:
                        continue
                    key = (new_potential, skill_key)
                    if best_key is None or key < best_key:
                        best, best_key = (i, j), key

            if best is None or best_key is None:
                continue

            outgoing, incoming = self._swap(high, best[0], low, best[1])
            self._record(
                SwapRecord(
                    objective=Objective.POSITION_COUNT,
                    team_a=high,
                    team_b=low,
                    outgoing=outgoing,
                    incoming=incoming,
                    position=position,
                    before=(potential,),
                    after=(best_key[0],),
                )
            )
            return True
        return False

    def _balance_position_skill(self) -> bool:
        tolerance = self.settings.tolerance
        sums = skill_sums(self.teams)
        skill_bound = self._skill_bound(sums)

        for position in self.positions.positions:
            per_team = [
                sum(member.skill for member in team if member.position == position)
                for team in self.teams
            ]
            current = imbalance(per_team)
            if current[0] <= tolerance:
                continue
            high, low = _extremes(per_team)
            best: Optional[Tuple[int, int]] = None
            best_key = current
            for i, strong in enumerate(self.teams[high]):
                if strong.position != position:
                    continue
                for j, weak in enumerate(self.teams[low]):
                    if weak.position != position:
                        continue
                    delta = strong.skill - weak.skill
                    if delta <= 0:
                        continue
                    key = imbalance(_shifted(per_team, high, low, delta))
                    if self.settings.require_within_tolerance and key[0] > tolerance:
                        continue
                    if imbalance(_shifted(sums, high, low, delta))[0] > skill_bound:
                        continue
                    if key < best_key:
                        best, best_key = (i, j), key

            if best is None:
                continue

            outgoing, incoming = self._swap(high, best[0], low, best[1])
            self._record(
                SwapRecord(
                    objective=Objective.POSITION_SKILL,
                    team_a=high,
                    team_b=low,
                    outgoing=outgoing,
                    incoming=incoming,
                    position=position,
                    before=current,
                    after=best_key,
                )
            )
            return True
        return False


def optimize(
    teams: List[Team],
    settings: BalanceSettings | None = None,
    *,
    positions: PositionSet | None = None,
) -> List[Team]:
    """Improve ``teams`` in place and return it."""

    return BalanceOptimizer(teams, settings, positions=positions).run()
