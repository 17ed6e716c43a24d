"""Command-line interface for splitting a roster into balanced teams."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from teambalance.allocator import InvalidConfiguration, allocate
from teambalance.config import (
    BalanceSettings,
    DEFAULT_POSITION_SET,
    PositionSet,
    custom_position_set,
    get_position_set,
)
from teambalance.config_loader import BalanceProfile
from teambalance.ingest import EmptyRoster, load_roster_csv, load_roster_text, require_records
from teambalance.stats import export_teams_to_csv

_CUSTOM_KEY = "CUSTOM"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a roster into skill- and position-balanced teams")
    parser.add_argument("roster", type=Path, help="Roster file (.csv, or one participant per line)")
    parser.add_argument("--teams", type=int, default=2, help="Number of teams to build")
    parser.add_argument(
        "--positions",
        default=None,
        help=f"Position set key (default {DEFAULT_POSITION_SET})",
    )
    parser.add_argument(
        "--position-codes",
        default=None,
        help="Comma-separated custom position codes, first one is the default",
    )
    parser.add_argument("--tolerance", type=int, default=None, help="Allowed skill-sum spread between teams")
    parser.add_argument("--max-iterations", type=int, default=None, help="Optimizer iteration budget")
    parser.add_argument("--fallback-attempts", type=int, default=None, help="Random fallback swap budget")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Only swap same-position players and also balance per-position skill totals",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible shuffle")
    parser.add_argument(
        "--roster-column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load balance profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save balance profile JSON", default=None)
    parser.add_argument("--output", type=Path, default=Path("teams.csv"), help="Output CSV path")
    parser.add_argument("--report", type=Path, default=None, help="Optional path to write summary JSON")
    parser.add_argument("--hide-skills", action="store_true", help="Leave skill levels out of the CSV")
    parser.add_argument("--verbose", action="store_true", help="Log optimizer progress")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_positions(args: argparse.Namespace, profile: Optional[BalanceProfile]) -> PositionSet:
    if args.position_codes:
        return custom_position_set(args.position_codes.split(","), key=_CUSTOM_KEY)
    if profile and profile.position_codes and not args.positions:
        return custom_position_set(profile.position_codes, key=_CUSTOM_KEY)
    key = args.positions or (profile.position_set if profile else None) or DEFAULT_POSITION_SET
    return get_position_set(key)


def _fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(2)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    roster_mapping = _parse_mapping(args.roster_column)
    profile = BalanceProfile.load(args.load_profile) if args.load_profile else None

    settings = BalanceSettings.from_env(base=BalanceSettings.strict() if args.strict else None)
    try:
        if profile:
            roster_mapping = profile.roster_mapping | roster_mapping
            settings = profile.apply(settings)
        settings = settings.with_overrides(
            tolerance=args.tolerance,
            max_iterations=args.max_iterations,
            max_fallback_attempts=args.fallback_attempts,
        )
        positions = _resolve_positions(args, profile)
    except (KeyError, ValueError) as exc:
        _fail(str(exc))

    if args.roster.suffix.lower() == ".csv":
        report = load_roster_csv(args.roster, positions, mapping=roster_mapping or None)
    else:
        report = load_roster_text(args.roster, positions)

    if args.save_profile:
        custom = positions.key == _CUSTOM_KEY
        BalanceProfile.from_settings(
            settings,
            roster_mapping=roster_mapping,
            position_set=None if custom else positions.key,
            position_codes=list(positions.positions) if custom else None,
        ).save(args.save_profile)
        print(f"Saved balance profile to {args.save_profile}")

    try:
        roster = require_records(report)
    except EmptyRoster as exc:
        _fail(str(exc))

    print(f"Imported {len(roster)} participants ({len(report.dropped_lines)} lines dropped)")
    if report.defaulted_position:
        preview = ", ".join(report.defaulted_position[:5])
        more = len(report.defaulted_position) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Defaulted to {positions.default}: {preview}{suffix}")

    try:
        result = allocate(roster, args.teams, settings=settings, positions=positions, seed=args.seed)
    except InvalidConfiguration as exc:
        _fail(str(exc))

    for team in result.summary.teams:
        breakdown = " ".join(
            f"{code}:{stat.count}/{stat.skill_sum}"
            for code, stat in team.positions.items()
            if stat.count
        )
        print(f"Team {team.index + 1}: {team.size} players, skill {team.skill_sum} [{breakdown}]")
    if not result.within_tolerance:
        print(
            f"Skill spread {result.skill_spread} is above tolerance {settings.tolerance}; "
            "try another seed or fewer teams"
        )

    args.output.write_text(
        export_teams_to_csv(result.teams, positions, hide_skills=args.hide_skills),
        encoding="utf-8",
    )
    print(f"Wrote teams to {args.output}")

    if args.report:
        payload = result.summary.to_dict()
        payload.update(
            {
                "position_set": positions.key,
                "tolerance": settings.tolerance,
                "iterations": result.iterations,
                "converged": result.converged,
                "moves": len(result.swaps),
                "fallback_used": result.fallback_used,
                "within_tolerance": result.within_tolerance,
            }
        )
        args.report.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote summary to {args.report}")


if __name__ == "__main__":
    main()
