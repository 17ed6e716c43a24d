"""Initial random split of a roster into near-equal teams."""

from __future__ import annotations

import random
from typing import List, Sequence

from teambalance.models import Participant


Team = List[Participant]


class InvalidConfiguration(ValueError):
    """Raised when an allocation cannot start (no teams, empty roster, ...)."""


def team_sizes(total: int, team_count: int) -> List[int]:
    base, extra = divmod(total, team_count)
    return [base + (1 if index < extra else 0) for index in range(team_count)]


def partition(
    roster: Sequence[Participant],
    team_count: int,
    *,
    rng: random.Random | None = None,
) -> List[Team]:
    """Shuffle ``roster`` uniformly and slice it into ``team_count`` teams.

    The first ``len(roster) % team_count`` teams receive one extra member so
    sizes never differ by more than one.
    """

    if team_count < 1:
        raise InvalidConfiguration(f"team_count must be >= 1, got {team_count}")
    if not roster:
        raise InvalidConfiguration("cannot allocate an empty roster")

    rng = rng or random.Random()
    shuffled = list(roster)
    rng.shuffle(shuffled)

    teams: List[Team] = []
    start = 0
    for size in team_sizes(len(shuffled), team_count):
        teams.append(shuffled[start:start + size])
        start += size
    return teams
