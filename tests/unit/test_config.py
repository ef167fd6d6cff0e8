from __future__ import annotations

from riakts_planner.config import (
    PlannerConfig,
    normalize_strategy,
    planner_config_from_env,
    resolve_planner_config,
)


def test_normalize_strategy_variants() -> None:
    assert normalize_strategy("Client") == "client"
    assert normalize_strategy(" server ") == "server"
    assert normalize_strategy("") == "server"
    assert normalize_strategy(None, default="client") == "client"


def test_planner_config_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("RIAKTS_PLANNER_STRATEGY", "CLIENT")

    cfg = planner_config_from_env()

    assert cfg == PlannerConfig(strategy="client")


def test_planner_config_from_env_defaults(monkeypatch) -> None:
    monkeypatch.delenv("RIAKTS_PLANNER_STRATEGY", raising=False)

    cfg = planner_config_from_env()

    assert cfg.strategy == "server"


def test_resolve_planner_config_from_mapping() -> None:
    assert resolve_planner_config({"strategy": "CLIENT"}) == PlannerConfig(strategy="client")
    assert resolve_planner_config({}) == PlannerConfig(strategy="server")


def test_resolve_planner_config_dataclass_passthrough() -> None:
    original = PlannerConfig(strategy="client")
    cfg = resolve_planner_config(original)
    assert cfg is original


def test_resolve_planner_config_none_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("RIAKTS_PLANNER_STRATEGY", "client")
    assert resolve_planner_config(None) == PlannerConfig(strategy="client")
