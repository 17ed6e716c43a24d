"""Persist and load CLI balance profiles."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

from teambalance.config import BalanceSettings


@dataclass
class BalanceProfile:
    roster_mapping: Dict[str, str] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)
    position_set: str | None = None
    position_codes: List[str] | None = None

    @classmethod
    def load(cls, path: Path) -> "BalanceProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            roster_mapping=data.get("roster_mapping", {}),
            settings=data.get("settings", {}),
            position_set=data.get("position_set"),
            position_codes=data.get("position_codes"),
        )

    @classmethod
    def from_settings(
        cls,
        settings: BalanceSettings,
        *,
        roster_mapping: Dict[str, str] | None = None,
        position_set: str | None = None,
        position_codes: List[str] | None = None,
    ) -> "BalanceProfile":
        return cls(
            roster_mapping=dict(roster_mapping or {}),
            settings=asdict(settings),
            position_set=position_set,
            position_codes=list(position_codes) if position_codes else None,
        )

    def apply(self, base: BalanceSettings) -> BalanceSettings:
        """Overlay the stored settings on ``base``, ignoring unknown keys."""

        known = {item.name for item in fields(BalanceSettings)}
        return base.with_overrides(**{key: value for key, value in self.settings.items() if key in known})

    def save(self, path: Path) -> None:
        payload = {
            "roster_mapping": self.roster_mapping,
            "settings": self.settings,
            "position_set": self.position_set,
            "position_codes": self.position_codes,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
