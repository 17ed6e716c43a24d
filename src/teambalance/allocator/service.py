"""End-to-end allocation: partition, optimize, then random fallback."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
import time
from typing import List, Optional, Sequence

from teambalance.config import BalanceSettings, PositionSet, get_position_set
from teambalance.models import Participant
from teambalance.stats import AssignmentSummary, summarize_assignment, verify_totals

from .fallback import fallback_balance
from .optimizer import BalanceOptimizer, SwapRecord, skill_spread
from .partition import InvalidConfiguration, Team, partition


logger = logging.getLogger(__name__)


@dataclass
class AllocationResult:
    teams: List[Team]
    summary: AssignmentSummary
    iterations: int
    converged: bool
    swaps: List[SwapRecord]
    fallback_used: bool
    skill_spread: int
    within_tolerance: bool


def _validate_roster(
    roster: Sequence[Participant],
    team_count: int,
    positions: PositionSet,
) -> None:
    if team_count < 1:
        raise InvalidConfiguration(f"team_count must be >= 1, got {team_count}")
    if not roster:
        raise InvalidConfiguration("cannot allocate an empty roster")
    unknown = sorted({member.position for member in roster if not positions.contains(member.position)})
    if unknown:
        raise InvalidConfiguration(
            f"positions {', '.join(unknown)} are not part of position set {positions.key}"
        )


def allocate(
    roster: Sequence[Participant],
    team_count: int,
    *,
    settings: BalanceSettings | None = None,
    positions: PositionSet | None = None,
    rng: random.Random | None = None,
    seed: Optional[int] = None,
) -> AllocationResult:
    """Split ``roster`` into ``team_count`` balanced teams.

    Balance is best effort: when the tolerance is unreachable for the given
    roster the closest assignment found is returned with
    ``within_tolerance`` set to ``False``. Calling again with a different
    (or no) seed produces a fresh shuffle.
    """

    settings = settings or BalanceSettings()
    positions = positions or get_position_set()
    _validate_roster(roster, team_count, positions)
    if rng is None:
        rng = random.Random(seed)

    run_start = time.perf_counter()
    teams = partition(roster, team_count, rng=rng)

    optimizer = BalanceOptimizer(teams, settings, positions=positions)
    teams = optimizer.run()

    fallback_used = False
    if skill_spread(teams) > settings.tolerance:
        teams, fallback_used = fallback_balance(teams, settings, rng=rng)

    summary = summarize_assignment(teams, positions)
    verify_totals(roster, summary)

    spread = summary.skill_spread
    logger.info(
        "Allocated %d participants into %d teams in %.3fs (spread=%d, tolerance=%d, iterations=%d, moves=%d, fallback=%s)",
        len(roster),
        team_count,
        time.perf_counter() - run_start,
        spread,
        settings.tolerance,
        optimizer.iterations,
        len(optimizer.swaps),
        "accepted" if fallback_used else "unused",
    )
    if spread > settings.tolerance:
        logger.info("Skill spread %d exceeds tolerance %d; returning best effort", spread, settings.tolerance)

    return AllocationResult(
        teams=teams,
        summary=summary,
        iterations=optimizer.iterations,
        converged=optimizer.converged,
        swaps=list(optimizer.swaps),
        fallback_used=fallback_used,
        skill_spread=spread,
        within_tolerance=spread <= settings.tolerance,
    )
