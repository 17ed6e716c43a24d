import pytest

from teambalance.config import BalanceSettings


def test_relaxed_defaults():
    settings = BalanceSettings.relaxed()
    assert settings.tolerance == 1
    assert settings.max_iterations == 1000
    assert settings.max_fallback_attempts == 100
    assert not settings.same_position_swaps
    assert not settings.balance_position_skill


def test_strict_preset():
    settings = BalanceSettings.strict()
    assert settings.tolerance == 2
    assert settings.same_position_swaps
    assert settings.require_within_tolerance
    assert settings.balance_position_skill


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.delenv("TEAMBALANCE_STRICT", raising=False)
    monkeypatch.setenv("TEAMBALANCE_TOLERANCE", "3")
    monkeypatch.setenv("TEAMBALANCE_MAX_ITERATIONS", "50")
    monkeypatch.setenv("TEAMBALANCE_FALLBACK_ATTEMPTS", "-4")
    settings = BalanceSettings.from_env()
    assert settings.tolerance == 3
    assert settings.max_iterations == 50
    assert settings.max_fallback_attempts == 0


def test_from_env_invalid_value_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("TEAMBALANCE_TOLERANCE", "wide")
    monkeypatch.delenv("TEAMBALANCE_STRICT", raising=False)
    with caplog.at_level("WARNING"):
        settings = BalanceSettings.from_env()
    assert settings.tolerance == 1
    assert "TEAMBALANCE_TOLERANCE" in caplog.text


def test_from_env_strict_flag(monkeypatch):
    monkeypatch.setenv("TEAMBALANCE_STRICT", "yes")
    monkeypatch.delenv("TEAMBALANCE_TOLERANCE", raising=False)
    settings = BalanceSettings.from_env()
    assert settings.same_position_swaps
    assert settings.tolerance == 2


def test_with_overrides_ignores_none():
    settings = BalanceSettings().with_overrides(tolerance=None, max_iterations=10)
    assert settings.tolerance == 1
    assert settings.max_iterations == 10


def test_negative_tolerance_rejected():
    with pytest.raises(ValueError):
        BalanceSettings(tolerance=-1)


def test_from_env_overrides_apply_on_given_base(monkeypatch):
    monkeypatch.setenv("TEAMBALANCE_TOLERANCE", "4")
    monkeypatch.delenv("TEAMBALANCE_MAX_ITERATIONS", raising=False)
    monkeypatch.delenv("TEAMBALANCE_FALLBACK_ATTEMPTS", raising=False)
    settings = BalanceSettings.from_env(base=BalanceSettings.strict())
    assert settings.tolerance == 4
    assert settings.same_position_swaps
    assert settings.balance_position_skill
    assert settings.max_iterations == 1000
