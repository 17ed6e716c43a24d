"""Team allocation: initial split, swap optimizer and random fallback."""

from .fallback import fallback_balance
from .optimizer import (
    BalanceOptimizer,
    Objective,
    OptimizerState,
    SwapRecord,
    optimize,
    skill_spread,
    skill_sums,
)
from .partition import InvalidConfiguration, partition
from .service import AllocationResult, allocate

__all__ = [
    "AllocationResult",
    "BalanceOptimizer",
    "InvalidConfiguration",
    "Objective",
    "OptimizerState",
    "SwapRecord",
    "allocate",
    "fallback_balance",
    "optimize",
    "partition",
    "skill_spread",
    "skill_sums",
]
