"""Configuration helpers for position sets and balance settings."""

from .positions import (
    DEFAULT_POSITION_SET,
    PositionSet,
    custom_position_set,
    get_position_set,
    iter_position_sets,
)
from .settings import BalanceSettings

__all__ = [
    "BalanceSettings",
    "DEFAULT_POSITION_SET",
    "PositionSet",
    "custom_position_set",
    "get_position_set",
    "iter_position_sets",
]
