import csv
import json
from pathlib import Path

import pytest

from teambalance import cli


ROSTER_TEXT = """Nguyen Van A, 3, ST
Tran Thi B, 5, GK
Le Van C 4 CB
Pham D 2 CB

Hoang E 1 GK
Vu F - 5 - ST
"""


def _read_rows(path: Path) -> list[dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_cli_writes_team_csv_and_report(tmp_path: Path, capsys):
    roster = tmp_path / "roster.txt"
    roster.write_text(ROSTER_TEXT, encoding="utf-8")
    output = tmp_path / "teams.csv"
    report = tmp_path / "summary.json"

    cli.main([
        str(roster),
        "--teams", "2",
        "--seed", "8",
        "--output", str(output),
        "--report", str(report),
    ])

    rows = _read_rows(output)
    assert len(rows) == 6
    assert {row["team"] for row in rows} == {"1", "2"}
    assert sorted(row["name"] for row in rows) == sorted(
        ["Nguyen Van A", "Tran Thi B", "Le Van C", "Pham D", "Hoang E", "Vu F"]
    )

    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["total_count"] == 6
    assert payload["total_skill"] == 20
    assert payload["position_set"] == "FOOTBALL"
    assert len(payload["teams"]) == 2

    out = capsys.readouterr().out
    assert "Imported 6 participants (0 lines dropped)" in out
    assert "Team 1:" in out and "Team 2:" in out


def test_cli_hide_skills_and_csv_roster(tmp_path: Path):
    roster = tmp_path / "roster.csv"
    roster.write_text("Player,Level,Role\nAn,4,st\nBinh,2,gk\nChi,3,cb\nDung,3,cb\n", encoding="utf-8")
    output = tmp_path / "teams.csv"

    cli.main([
        str(roster),
        "--roster-column", "name=Player",
        "--roster-column", "skill=Level",
        "--roster-column", "position=Role",
        "--seed", "1",
        "--hide-skills",
        "--output", str(output),
    ])

    rows = _read_rows(output)
    assert sorted(row["name"] for row in rows) == ["An", "Binh", "Chi", "Dung"]
    assert all(row["skill"] == "" for row in rows)


def test_cli_saves_and_loads_profile(tmp_path: Path):
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 CM\nBinh 2 GK\n", encoding="utf-8")
    profile = tmp_path / "profile.json"

    cli.main([
        str(roster),
        "--positions", "FOOTBALL_CM",
        "--strict",
        "--seed", "2",
        "--save-profile", str(profile),
        "--output", str(tmp_path / "first.csv"),
    ])

    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["position_set"] == "FOOTBALL_CM"
    assert saved["settings"]["same_position_swaps"] is True

    output = tmp_path / "second.csv"
    cli.main([str(roster), "--load-profile", str(profile), "--seed", "2", "--output", str(output)])
    assert {row["position"] for row in _read_rows(output)} == {"CM", "GK"}


def test_cli_empty_roster_exits(tmp_path: Path, capsys):
    roster = tmp_path / "roster.txt"
    roster.write_text("  \n - \n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(roster), "--output", str(tmp_path / "teams.csv")])

    assert excinfo.value.code == 2
    assert "no usable participants" in capsys.readouterr().err


def test_cli_rejects_zero_teams(tmp_path: Path, capsys):
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 ST\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(roster), "--teams", "0", "--output", str(tmp_path / "teams.csv")])

    assert excinfo.value.code == 2
    assert "team_count" in capsys.readouterr().err


def test_cli_rejects_unknown_position_set(tmp_path: Path, capsys):
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 ST\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(roster), "--positions", "CURLING"])

    assert excinfo.value.code == 2
    assert "CURLING" in capsys.readouterr().err


def test_cli_custom_position_codes(tmp_path: Path):
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 PG\nBinh 2 C\nChi 3\n", encoding="utf-8")
    output = tmp_path / "teams.csv"

    cli.main([str(roster), "--position-codes", "pg,c", "--seed", "3", "--output", str(output)])

    positions = {row["name"]: row["position"] for row in _read_rows(output)}
    assert positions == {"An": "PG", "Binh": "C", "Chi": "PG"}


def test_cli_strict_keeps_env_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TEAMBALANCE_TOLERANCE", "3")
    monkeypatch.delenv("TEAMBALANCE_MAX_ITERATIONS", raising=False)
    monkeypatch.delenv("TEAMBALANCE_FALLBACK_ATTEMPTS", raising=False)
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 ST\nBinh 2 GK\nChi 3 ST\nDung 3 GK\n", encoding="utf-8")
    report = tmp_path / "summary.json"

    cli.main([
        str(roster),
        "--strict",
        "--seed", "4",
        "--output", str(tmp_path / "teams.csv"),
        "--report", str(report),
    ])

    assert json.loads(report.read_text(encoding="utf-8"))["tolerance"] == 3


def test_cli_profile_keeps_custom_position_codes(tmp_path: Path):
    roster = tmp_path / "roster.txt"
    roster.write_text("An 4 PG\nBinh 2 C\nChi 3\n", encoding="utf-8")
    profile = tmp_path / "profile.json"

    cli.main([
        str(roster),
        "--position-codes", "pg,c",
        "--seed", "3",
        "--save-profile", str(profile),
        "--output", str(tmp_path / "first.csv"),
    ])

    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["position_codes"] == ["PG", "C"]
    assert saved["position_set"] is None

    output = tmp_path / "second.csv"
    cli.main([str(roster), "--load-profile", str(profile), "--seed", "3", "--output", str(output)])

    positions = {row["name"]: row["position"] for row in _read_rows(output)}
    assert positions == {"An": "PG", "Binh": "C", "Chi": "PG"}
