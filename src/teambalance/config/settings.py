"""Balance tuning knobs with environment overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os


logger = logging.getLogger(__name__)

_TOLERANCE_ENV = "TEAMBALANCE_TOLERANCE"
_MAX_ITERATIONS_ENV = "TEAMBALANCE_MAX_ITERATIONS"
_FALLBACK_ATTEMPTS_ENV = "TEAMBALANCE_FALLBACK_ATTEMPTS"
_STRICT_ENV = "TEAMBALANCE_STRICT"

_TOLERANCE_DEFAULT = 1
_STRICT_TOLERANCE_DEFAULT = 2
_MAX_ITERATIONS_DEFAULT = 1000
_FALLBACK_ATTEMPTS_DEFAULT = 100


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "f", "no", "n", "off", ""}:
        return False
    logger.warning("Invalid flag for %s: %s; using default %s", name, raw, default)
    return default


@dataclass(frozen=True)
class BalanceSettings:
    """Knobs for the balance optimizer and its random fallback.

    ``tolerance`` is the largest acceptable gap between the strongest and the
    weakest team's skill total. The strict preset only swaps players that
    share a position, requires every skill swap to land inside the
    tolerance, and additionally evens out per-position skill totals.
    """

    tolerance: int = _TOLERANCE_DEFAULT
    max_iterations: int = _MAX_ITERATIONS_DEFAULT
    max_fallback_attempts: int = _FALLBACK_ATTEMPTS_DEFAULT
    same_position_swaps: bool = False
    require_within_tolerance: bool = False
    balance_position_skill: bool = False

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.max_fallback_attempts < 0:
            raise ValueError(
                f"max_fallback_attempts must be >= 0, got {self.max_fallback_attempts}"
            )

    @classmethod
    def relaxed(cls) -> "BalanceSettings":
        return cls()

    @classmethod
    def strict(cls) -> "BalanceSettings":
        return cls(
            tolerance=_STRICT_TOLERANCE_DEFAULT,
            same_position_swaps=True,
            require_within_tolerance=True,
            balance_position_skill=True,
        )

    @classmethod
    def from_env(cls, base: "BalanceSettings | None" = None) -> "BalanceSettings":
        """Apply ``TEAMBALANCE_*`` overrides on ``base``, or on the preset picked by ``TEAMBALANCE_STRICT``."""

        if base is None:
            base = cls.strict() if _env_flag(_STRICT_ENV, False) else cls.relaxed()
        return replace(
            base,
            tolerance=_env_int(_TOLERANCE_ENV, base.tolerance, min_value=0),
            max_iterations=_env_int(_MAX_ITERATIONS_ENV, base.max_iterations, min_value=0),
            max_fallback_attempts=_env_int(
                _FALLBACK_ATTEMPTS_ENV, base.max_fallback_attempts, min_value=0
            ),
        )

    def with_overrides(self, **overrides: object) -> "BalanceSettings":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)
