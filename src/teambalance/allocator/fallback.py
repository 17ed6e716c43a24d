"""Bounded random-swap fallback for assignments the optimizer could not settle."""

from __future__ import annotations

import logging
import random
from typing import List, Tuple

from teambalance.config import BalanceSettings

from .optimizer import skill_spread
from .partition import Team


logger = logging.getLogger(__name__)


def fallback_balance(
    teams: List[Team],
    settings: BalanceSettings | None = None,
    *,
    rng: random.Random | None = None,
) -> Tuple[List[Team], bool]:
    """Try random single-player swaps until the skill spread fits the tolerance.

    Returns the first scratch assignment within tolerance together with
    ``True``. When no attempt succeeds the input assignment is returned
    untouched with ``False``.
    """

    settings = settings or BalanceSettings()
    rng = rng or random.Random()

    if skill_spread(teams) <= settings.tolerance:
        return teams, True

    candidates = [index for index, team in enumerate(teams) if team]
    if len(candidates) < 2:
        return teams, False

    for attempt in range(1, settings.max_fallback_attempts + 1):
        team_a, team_b = rng.sample(candidates, 2)
        index_a = rng.randrange(len(teams[team_a]))
        index_b = rng.randrange(len(teams[team_b]))

        scratch = [list(team) for team in teams]
        scratch[team_a][index_a], scratch[team_b][index_b] = (
            scratch[team_b][index_b],
            scratch[team_a][index_a],
        )
        if skill_spread(scratch) <= settings.tolerance:
            logger.debug("Fallback swap accepted on attempt %d", attempt)
            return scratch, True

    logger.debug(
        "Fallback exhausted %d attempts; keeping skill spread %d",
        settings.max_fallback_attempts,
        skill_spread(teams),
    )
    return teams, False
