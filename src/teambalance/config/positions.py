"""Position sets for supported roster configurations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PositionSet:
    key: str
    positions: Tuple[str, ...]
    labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def default(self) -> str:
        """Position assigned when a record does not name a known one."""

        return self.positions[0]

    def normalize(self, code: Optional[str]) -> Optional[str]:
        """Return the canonical code for ``code`` or ``None`` if unknown."""

        if code is None:
            return None
        token = code.strip().upper()
        return token if token in self.positions else None

    def contains(self, code: Optional[str]) -> bool:
        return self.normalize(code) is not None

    def label(self, code: str) -> str:
        return self.labels.get(code, code)


_POSITION_SETS: Dict[str, PositionSet] = {
    "FOOTBALL": PositionSet(
        key="FOOTBALL",
        positions=("ST", "CAM", "CB", "LM", "RM", "GK"),
        labels={
            "ST": "Striker",
            "CAM": "Attacking midfielder",
            "CB": "Centre back",
            "LM": "Left winger",
            "RM": "Right winger",
            "GK": "Goalkeeper",
        },
    ),
    "FOOTBALL_CM": PositionSet(
        key="FOOTBALL_CM",
        positions=("GK", "CB", "LM", "RM", "CM", "ST"),
        labels={
            "GK": "Goalkeeper",
            "CB": "Centre back",
            "LM": "Left midfielder",
            "RM": "Right midfielder",
            "CM": "Central midfielder",
            "ST": "Striker",
        },
    ),
}

DEFAULT_POSITION_SET = "FOOTBALL"


def iter_position_sets() -> Iterable[PositionSet]:
    """Return an iterator of all configured position sets."""

    return _POSITION_SETS.values()


def get_position_set(key: str = DEFAULT_POSITION_SET) -> PositionSet:
    """Fetch a position set by key, raising KeyError if missing."""

    normalized = key.strip().upper()
    if normalized not in _POSITION_SETS:
        raise KeyError(f"No position set configured for key={key!r}")
    return _POSITION_SETS[normalized]


def custom_position_set(codes: Sequence[str], *, key: str = "CUSTOM") -> PositionSet:
    """Build an ad-hoc position set from an ordered list of codes."""

    if isinstance(codes, str):
        raise TypeError("codes must be a sequence of position codes, not a str")

    positions = tuple(code.strip().upper() for code in codes if code and code.strip())
    if not positions:
        raise ValueError("a position set needs at least one position code")
    if len(set(positions)) != len(positions):
        raise ValueError(f"duplicate position codes in {positions!r}")
    return PositionSet(key=key.upper(), positions=positions)
